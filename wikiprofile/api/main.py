from fastapi import APIRouter

from wikiprofile.api.api import api_router as feature_api_router
from wikiprofile.api.utils import utils_route

api_router = APIRouter()
api_router.include_router(feature_api_router)
api_router.include_router(utils_route.router)

"""API endpoints."""

from fastapi import APIRouter

from wikiprofile.api.admin import admin_route
from wikiprofile.api.auth import auth_route
from wikiprofile.api.entry import entry_route
from wikiprofile.api.user import user_route

api_router = APIRouter()
api_router.include_router(auth_route.router)
api_router.include_router(user_route.router)
api_router.include_router(entry_route.router)
api_router.include_router(admin_route.router)

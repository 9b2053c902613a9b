"""Local signup/login and token endpoints."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm

from wikiprofile.api.auth.auth_token import AuthSession, Token
from wikiprofile.api.user import user_service
from wikiprofile.api.user.user_model import User
from wikiprofile.api.user.user_schema import UserLogin, UserPublic, UserSignup
from wikiprofile.core import security
from wikiprofile.core.config import settings
from wikiprofile.core.errors import UnauthenticatedError
from wikiprofile.utils.deps import OptionalUser, SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _issue_token(user: User) -> str:
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return security.create_access_token(
        user.id, expires_delta=access_token_expires, role=user.role.value
    )


def _authenticate(session: SessionDep, username: str, password: str) -> User:
    user = user_service.authenticate(
        session=session, username=username, password=password
    )
    if not user:
        logger.warning(f"Failed login for username '{username}'")
        raise UnauthenticatedError("Invalid credentials")
    if not user.is_active:
        raise UnauthenticatedError("Inactive user")
    return user


@router.post("/auth/signup", response_model=AuthSession)
def signup(session: SessionDep, user_in: UserSignup) -> AuthSession:
    """
    Create a local account. The password must have at least 8 characters,
    an uppercase letter, a digit and a symbol.
    """
    user = user_service.signup_local_user(session=session, user_in=user_in)
    logger.info(f"Local signup for '{user.username}'")
    return AuthSession(
        access_token=_issue_token(user), user=UserPublic.model_validate(user)
    )


@router.post("/auth/login", response_model=AuthSession)
def login(session: SessionDep, credentials: UserLogin) -> AuthSession:
    """Log in with username and password."""
    user = _authenticate(session, credentials.username, credentials.password)
    logger.info(f"User '{user.username}' logged in")
    return AuthSession(
        access_token=_issue_token(user), user=UserPublic.model_validate(user)
    )


@router.post("/login/access-token")
def login_access_token(
    session: SessionDep, form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
) -> Token:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    user = _authenticate(session, form_data.username, form_data.password)
    return Token(access_token=_issue_token(user))


@router.get("/auth/user", response_model=UserPublic | None)
def read_auth_user(current_user: OptionalUser) -> User | None:
    """The signed-in user, or null for anonymous callers."""
    return current_user

import uuid
from collections.abc import Generator
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError as PayloadError
from sqlmodel import Session

from wikiprofile.api.auth.auth_context import AuthContext
from wikiprofile.api.auth.auth_token import TokenPayload
from wikiprofile.api.user.user_model import Role, User
from wikiprofile.core import security
from wikiprofile.core.config import settings
from wikiprofile.core.errors import ForbiddenError, UnauthenticatedError
from wikiprofile.db.session import engine

# auto_error is off so that public routes can accept an optional identity
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token", auto_error=False
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str | None, Depends(reusable_oauth2)]


def decode_token(token: str) -> TokenPayload:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[security.ALGORITHM]
        )
        return TokenPayload(**payload)
    except (InvalidTokenError, PayloadError):
        raise UnauthenticatedError("Could not validate credentials")


def _load_user(session: Session, token: str) -> User:
    token_data = decode_token(token)
    try:
        user_id = uuid.UUID(str(token_data.sub))
    except ValueError:
        raise UnauthenticatedError("Could not validate credentials")
    user = session.get(User, user_id)
    if not user or not user.is_active:
        raise UnauthenticatedError("User not found or inactive")
    return user


def get_current_user(session: SessionDep, token: TokenDep) -> User:
    """
    Decode token and fetch user from database.
    This ensures you always have the latest user data (role, active status, etc.)
    """
    if not token:
        raise UnauthenticatedError()
    return _load_user(session, token)


def get_optional_user(session: SessionDep, token: TokenDep) -> User | None:
    """Like get_current_user, but anonymous requests yield None instead of 401."""
    if not token:
        return None
    try:
        return _load_user(session, token)
    except UnauthenticatedError:
        return None


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]


def get_auth_context(current_user: CurrentUser) -> AuthContext:
    return AuthContext.for_user(current_user)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


class RoleChecker:
    """
    Dependency class for role-based access control. Roles are ordered, so
    the caller passes when their role is at least the required one.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(RoleChecker(Role.ADMIN))])
        def admin_endpoint():
            ...
    """

    def __init__(self, minimum_role: Role):
        self.minimum_role = minimum_role

    def __call__(self, auth: AuthDep) -> AuthContext:
        if not auth.has_role(self.minimum_role):
            raise ForbiddenError(
                f"Role '{auth.role.value}' is not authorized. Required: '{self.minimum_role.value}'"
            )
        return auth


# Type alias for admin-only endpoints
AdminDep = Annotated[AuthContext, Depends(RoleChecker(Role.ADMIN))]

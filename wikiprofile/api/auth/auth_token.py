"""Token schemas."""

from datetime import datetime

from sqlmodel import SQLModel

from wikiprofile.api.user.user_schema import UserPublic


# JSON payload containing access token
class Token(SQLModel):
    """Access token schema."""

    access_token: str
    token_type: str = "bearer"


class AuthSession(Token):
    """Token plus the signed-in user, returned by signup and login."""

    user: UserPublic


# Contents of JWT token
class TokenPayload(SQLModel):
    """
    JWT token payload schema.

    Fields:
        sub: User ID (subject)
        exp: Expiration timestamp
        iat: Issued at timestamp
        role: User's role when the token was issued
    """

    sub: str | None = None
    exp: datetime | None = None
    iat: datetime | None = None
    role: str | None = None

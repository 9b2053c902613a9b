"""User model."""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """User roles for RBAC, ordered by privilege."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]

    def at_least(self, other: "Role") -> bool:
        return self.level >= other.level


_ROLE_LEVELS = {Role.USER: 0, Role.MODERATOR: 1, Role.ADMIN: 2}


class UserBase(SQLModel):
    """Shared user properties."""

    username: str | None = Field(default=None, unique=True, index=True, max_length=20)
    email: str | None = Field(default=None, unique=True, index=True, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    profile_image_url: str | None = None
    is_active: bool = True
    role: Role = Field(default=Role.USER)


class User(UserBase, table=True):
    """Database model for an account, local or externally authenticated."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    hashed_password: str | None = None
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        """Derived from the role; there is no separate admin flag."""
        return self.role == Role.ADMIN

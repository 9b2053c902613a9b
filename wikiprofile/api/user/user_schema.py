"""User schemas for data validation."""

import re
import uuid
from datetime import datetime

from pydantic import computed_field, field_validator
from sqlmodel import Field, SQLModel

from wikiprofile.api.user.user_model import Role
from wikiprofile.core.security import password_problems

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


# Properties to receive via API on local signup
class UserSignup(SQLModel):
    """Local username/password signup schema."""

    username: str = Field(min_length=3, max_length=20)
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    password: str = Field(max_length=128)

    @field_validator("username")
    @classmethod
    def username_is_word(cls, value: str) -> str:
        if not re.fullmatch(USERNAME_PATTERN, value):
            raise ValueError("Username may only contain letters, digits and underscores")
        return value

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, value: str) -> str:
        problems = password_problems(value)
        if problems:
            raise ValueError("Password must contain " + ", ".join(problems))
        return value


class UserLogin(SQLModel):
    """Local login schema."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# Internal creation schema, used by signup and the superuser bootstrap
class UserCreate(SQLModel):
    """User creation schema."""

    username: str | None = None
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: Role = Role.USER


# Properties a user may change on their own profile
class UserUpdateMe(SQLModel):
    """User self-update schema."""

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    profile_image_url: str | None = None


class RoleUpdate(SQLModel):
    """Admin role assignment schema."""

    role: Role


# Properties to return via API, id is always required
class UserPublic(SQLModel):
    """Public user schema."""

    id: uuid.UUID
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    role: Role = Role.USER
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class UserWithEntryCount(UserPublic):
    """User row for the directory listing."""

    entry_count: int = 0


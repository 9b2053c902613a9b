"""Schemas for wiki entries."""

import uuid
from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from wikiprofile.api.entry.entry_model import EntryStatus
from wikiprofile.api.user.user_schema import UserPublic

TITLE_MAX_LENGTH = 255
DESCRIPTION_MIN_LENGTH = 10


class EntryCreate(SQLModel):
    """
    Schema for creating an entry.
    Owner and status are never taken from the request.
    """

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(min_length=DESCRIPTION_MIN_LENGTH)
    image_url: str | None = None


class EntryContentUpdate(SQLModel):
    """
    Owner edit of an entry's content. There is no status field: any status
    sent by the client is dropped during parsing.
    """

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, min_length=DESCRIPTION_MIN_LENGTH)
    image_url: str | None = None

    @field_validator("title", "description")
    @classmethod
    def not_null_when_sent(cls, value: str | None) -> str:
        # fields may be omitted, but an explicit null would blank a required column
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EntryStatusUpdate(SQLModel):
    """Admin moderation decision. Carries no content fields."""

    status: EntryStatus
    reason: str | None = Field(default=None, max_length=1000)


class EntryPublic(SQLModel):
    """Response schema for an entry."""

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    image_url: str | None = None
    status: EntryStatus
    moderation_note: str | None = None
    moderated_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EntryWithAuthor(EntryPublic):
    """Entry with its owner attached, for directory and admin listings."""

    user: UserPublic


class UserProfile(UserPublic):
    """A user's profile page with the entries the caller may see."""

    wiki_entries: list[EntryPublic] = []


class ModerationStats(SQLModel):
    """Entry counts per moderation status."""

    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0

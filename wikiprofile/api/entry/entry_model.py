"""Wiki entry model."""

import uuid
from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from wikiprofile.api.user.user_model import utc_now


class EntryStatus(str, Enum):
    """Moderation status of an entry."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WikiEntry(SQLModel, table=True):
    """
    A user-authored entry shown on its owner's profile.
    Only approved entries are visible in the public directory.
    """

    __tablename__ = "wiki_entries"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    user_id: uuid.UUID = Field(
        index=True,
        foreign_key="users.id",
        ondelete="CASCADE",
        description="Owning user",
    )

    title: str = Field(max_length=255)
    description: str
    image_url: str | None = None

    status: EntryStatus = Field(default=EntryStatus.PENDING, index=True)

    # === Last moderation decision ===
    moderation_note: str | None = Field(
        default=None, description="Reason given by the moderator"
    )
    moderated_by: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    moderated_at: datetime | None = None

    # === Timestamps ===
    created_at: datetime | None = Field(default_factory=utc_now, index=True)
    updated_at: datetime | None = Field(default_factory=utc_now)

    @property
    def is_public(self) -> bool:
        return self.status == EntryStatus.APPROVED

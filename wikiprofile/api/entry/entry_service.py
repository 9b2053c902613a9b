import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from wikiprofile.api.auth.auth_context import AuthContext, ensure_admin
from wikiprofile.api.entry import entry_moderation
from wikiprofile.api.entry.entry_model import EntryStatus, WikiEntry
from wikiprofile.api.entry.entry_policy import can_view, ensure_owner, is_owner
from wikiprofile.api.entry.entry_schema import (
    EntryContentUpdate,
    EntryCreate,
    EntryPublic,
    EntryStatusUpdate,
    EntryWithAuthor,
    ModerationStats,
    UserProfile,
)
from wikiprofile.api.user.user_model import User
from wikiprofile.api.user.user_schema import UserPublic
from wikiprofile.core.errors import NotFoundError

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    """Substring pattern for ilike, with the search term matched literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


class EntryService:
    """Entry store operations, each gated on the caller's AuthContext."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # === Owner operations ===

    def create_entry(self, actor: AuthContext, entry_in: EntryCreate) -> WikiEntry:
        """Create an entry owned by the caller. New entries always await moderation."""
        entry = WikiEntry(
            user_id=actor.user_id,
            title=entry_in.title,
            description=entry_in.description,
            image_url=entry_in.image_url,
            status=entry_moderation.INITIAL_STATUS,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Entry {entry.id} created by {actor.user_id}")
        return entry

    def update_content(
        self, actor: AuthContext, entry_id: uuid.UUID, entry_in: EntryContentUpdate
    ) -> WikiEntry:
        """Owner edit of title/description/image. Always resets status to pending."""
        entry = self.get_entry(entry_id)
        ensure_owner(actor, entry, "edit")

        entry.sqlmodel_update(entry_in.model_dump(exclude_unset=True))
        entry_moderation.reset_for_review(entry)
        entry.updated_at = datetime.now(timezone.utc)

        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Entry {entry.id} updated by owner {actor.user_id}")
        return entry

    def delete_own_entry(self, actor: AuthContext, entry_id: uuid.UUID) -> None:
        entry = self.get_entry(entry_id)
        ensure_owner(actor, entry, "delete")
        self._delete(entry)
        logger.info(f"Entry {entry_id} deleted by owner {actor.user_id}")

    # === Reads ===

    def get_entry(self, entry_id: uuid.UUID) -> WikiEntry:
        entry = self.db.get(WikiEntry, entry_id)
        if not entry:
            raise NotFoundError("Entry not found")
        return entry

    def get_visible_entry(
        self, actor: AuthContext | None, entry_id: uuid.UUID
    ) -> WikiEntry:
        """Fetch an entry, hiding unapproved entries from everyone but the owner and admins."""
        entry = self.get_entry(entry_id)
        if not can_view(actor, entry):
            raise NotFoundError("Entry not found")
        return entry

    def list_user_entries(
        self, user_id: uuid.UUID, approved_only: bool = False
    ) -> list[WikiEntry]:
        statement = select(WikiEntry).where(col(WikiEntry.user_id) == user_id)
        if approved_only:
            statement = statement.where(col(WikiEntry.status) == EntryStatus.APPROVED)
        statement = statement.order_by(col(WikiEntry.created_at).desc())
        return list(self.db.exec(statement).all())

    def get_profile(self, actor: AuthContext | None, user_id: uuid.UUID) -> UserProfile:
        """
        A user's profile with their entries.
        The owner sees every status; anyone else sees approved entries only.
        """
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")

        owner_view = actor is not None and actor.user_id == user.id
        entries = self.list_user_entries(user.id, approved_only=not owner_view)
        return UserProfile.model_validate(
            user,
            update={
                "wiki_entries": [EntryPublic.model_validate(e) for e in entries]
            },
        )

    def list_approved(
        self, q: str | None = None, limit: int | None = None, offset: int = 0
    ) -> list[EntryWithAuthor]:
        """
        Public directory: approved entries only, newest first.
        `q` matches title, description and the author's name or username, taken
        literally. Without a `limit` every matching entry is returned.
        """
        statement: Any = (
            select(WikiEntry, User)
            .join(User, col(WikiEntry.user_id) == col(User.id))
            .where(col(WikiEntry.status) == EntryStatus.APPROVED)
        )
        if q and q.strip():
            pattern = _like_pattern(q.strip())
            statement = statement.where(
                or_(
                    col(WikiEntry.title).ilike(pattern, escape=LIKE_ESCAPE),
                    col(WikiEntry.description).ilike(pattern, escape=LIKE_ESCAPE),
                    col(User.first_name).ilike(pattern, escape=LIKE_ESCAPE),
                    col(User.last_name).ilike(pattern, escape=LIKE_ESCAPE),
                    col(User.username).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return self._with_authors(statement, limit=limit, offset=offset)

    # === Admin operations ===

    def list_all(
        self,
        actor: AuthContext,
        status: EntryStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[EntryWithAuthor]:
        ensure_admin(actor)
        statement: Any = select(WikiEntry, User).join(
            User, col(WikiEntry.user_id) == col(User.id)
        )
        if status is not None:
            statement = statement.where(col(WikiEntry.status) == status)
        return self._with_authors(statement, limit=limit, offset=offset)

    def moderate_entry(
        self, actor: AuthContext, entry_id: uuid.UUID, decision: EntryStatusUpdate
    ) -> WikiEntry:
        ensure_admin(actor)
        entry = self.get_entry(entry_id)
        entry_moderation.moderate(entry, decision.status, actor, note=decision.reason)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_any_entry(self, actor: AuthContext, entry_id: uuid.UUID) -> None:
        ensure_admin(actor)
        entry = self.get_entry(entry_id)
        owner_note = "own" if is_owner(actor, entry) else f"owned by {entry.user_id}"
        self._delete(entry)
        logger.info(f"Entry {entry_id} ({owner_note}) deleted by admin {actor.user_id}")

    def moderation_stats(self, actor: AuthContext) -> ModerationStats:
        ensure_admin(actor)
        statement: Any = select(WikiEntry.status, func.count(col(WikiEntry.id))).group_by(
            col(WikiEntry.status)
        )
        counts = {EntryStatus(status): count for status, count in self.db.exec(statement)}
        stats = ModerationStats(
            pending=counts.get(EntryStatus.PENDING, 0),
            approved=counts.get(EntryStatus.APPROVED, 0),
            rejected=counts.get(EntryStatus.REJECTED, 0),
        )
        stats.total = stats.pending + stats.approved + stats.rejected
        return stats

    # === Helpers ===

    def _delete(self, entry: WikiEntry) -> None:
        self.db.delete(entry)
        self.db.commit()

    def _with_authors(
        self, statement: Any, limit: int | None, offset: int
    ) -> list[EntryWithAuthor]:
        # newest first; id breaks ties so pages never overlap
        statement = statement.order_by(
            col(WikiEntry.created_at).desc(), col(WikiEntry.id)
        ).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        rows = self.db.exec(statement).all()
        return [
            EntryWithAuthor.model_validate(
                entry, update={"user": UserPublic.model_validate(user)}
            )
            for entry, user in rows
        ]

"""Moderation state machine for wiki entries.

Every entry is ``pending``, ``approved`` or ``rejected``. Admins may move an
entry between any two of those states (self-transitions included). An owner
edit of the content always sends the entry back to ``pending``.
"""

import logging
from datetime import datetime, timezone

from wikiprofile.api.auth.auth_context import AuthContext, ensure_admin
from wikiprofile.api.entry.entry_model import EntryStatus, WikiEntry
from wikiprofile.core.errors import ValidationError

logger = logging.getLogger(__name__)

INITIAL_STATUS = EntryStatus.PENDING


def parse_status(value: str | EntryStatus) -> EntryStatus:
    """Coerce a raw status value, raising ValidationError when it is not one of the enum values."""
    try:
        return EntryStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}")


def moderate(
    entry: WikiEntry,
    target: EntryStatus,
    actor: AuthContext,
    note: str | None = None,
) -> WikiEntry:
    """Apply an admin moderation decision to the entry in place."""
    ensure_admin(actor)

    target = parse_status(target)
    current = EntryStatus(entry.status)

    now = datetime.now(timezone.utc)
    entry.status = target
    entry.moderation_note = note
    entry.moderated_by = actor.user_id
    entry.moderated_at = now
    entry.updated_at = now

    logger.info(
        f"Entry {entry.id} moderated {current.value} -> {target.value} by {actor.user_id}"
    )
    return entry


def reset_for_review(entry: WikiEntry) -> WikiEntry:
    """Send an edited entry back to the moderation queue."""
    if entry.status != EntryStatus.PENDING:
        logger.info(f"Entry {entry.id} edited while {entry.status.value}, back to pending")
    entry.status = EntryStatus.PENDING
    entry.moderation_note = None
    entry.moderated_by = None
    entry.moderated_at = None
    return entry

"""Who may read, change or moderate an entry."""

from wikiprofile.api.auth.auth_context import AuthContext
from wikiprofile.api.entry.entry_model import WikiEntry
from wikiprofile.core.errors import ForbiddenError


def is_owner(actor: AuthContext | None, entry: WikiEntry) -> bool:
    return actor is not None and actor.user_id == entry.user_id


def can_view(actor: AuthContext | None, entry: WikiEntry) -> bool:
    """Approved entries are public; others only to their owner and admins."""
    if entry.is_public:
        return True
    if actor is None:
        return False
    return is_owner(actor, entry) or actor.is_admin


def ensure_owner(actor: AuthContext, entry: WikiEntry, action: str) -> None:
    if not is_owner(actor, entry):
        raise ForbiddenError(f"Forbidden - You can only {action} your own entries")

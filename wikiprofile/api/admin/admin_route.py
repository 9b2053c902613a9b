"""Admin routes - entry moderation and user role management."""

import uuid

from fastapi import APIRouter, Query, Response, status

from wikiprofile.api.entry.entry_model import EntryStatus, WikiEntry
from wikiprofile.api.entry.entry_schema import (
    EntryPublic,
    EntryStatusUpdate,
    EntryWithAuthor,
    ModerationStats,
)
from wikiprofile.api.entry.entry_service import EntryService
from wikiprofile.api.user import user_service
from wikiprofile.api.user.user_model import User
from wikiprofile.api.user.user_schema import RoleUpdate, UserPublic
from wikiprofile.utils.deps import AdminDep, SessionDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/entries", response_model=list[EntryWithAuthor])
def list_entries(
    session: SessionDep,
    admin: AdminDep,
    entry_status: EntryStatus | None = Query(
        default=None, alias="status", description="Filter by moderation status"
    ),
    limit: int | None = Query(
        default=None, ge=1, description="Page size; all entries when omitted"
    ),
    offset: int = Query(default=0, ge=0),
) -> list[EntryWithAuthor]:
    """All entries with their authors, newest first."""
    return EntryService(session).list_all(
        admin, status=entry_status, limit=limit, offset=offset
    )


@router.get("/entries/stats", response_model=ModerationStats)
def entry_stats(session: SessionDep, admin: AdminDep) -> ModerationStats:
    return EntryService(session).moderation_stats(admin)


@router.patch("/entries/{entry_id}/moderate", response_model=EntryPublic)
def moderate_entry(
    session: SessionDep,
    admin: AdminDep,
    entry_id: uuid.UUID,
    decision: EntryStatusUpdate,
) -> WikiEntry:
    """Set an entry's status to approved, rejected or pending, with an optional reason."""
    return EntryService(session).moderate_entry(admin, entry_id, decision)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(session: SessionDep, admin: AdminDep, entry_id: uuid.UUID) -> Response:
    EntryService(session).delete_any_entry(admin, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==================== USER MANAGEMENT ====================


@router.get("/users", response_model=list[UserPublic])
def list_users(session: SessionDep, _admin: AdminDep) -> list[User]:
    """List all users for admin management."""
    return user_service.list_users(session=session)


@router.patch("/users/{user_id}/role", response_model=UserPublic)
def update_user_role(
    session: SessionDep, admin: AdminDep, user_id: uuid.UUID, role_in: RoleUpdate
) -> User:
    """Update a user's role."""
    return user_service.update_role(
        session=session, actor=admin, user_id=user_id, role=role_in.role
    )

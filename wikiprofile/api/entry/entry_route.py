"""API routes for wiki entries."""

import uuid

from fastapi import APIRouter, Query, Response, status

from wikiprofile.api.entry.entry_model import WikiEntry
from wikiprofile.api.entry.entry_schema import (
    EntryContentUpdate,
    EntryCreate,
    EntryPublic,
    EntryWithAuthor,
)
from wikiprofile.api.entry.entry_service import EntryService
from wikiprofile.utils.deps import AuthDep, SessionDep

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("/approved", response_model=list[EntryWithAuthor])
def list_approved_entries(
    session: SessionDep,
    q: str | None = Query(
        default=None, description="Search title, description or author name"
    ),
    limit: int | None = Query(
        default=None, ge=1, description="Page size; all entries when omitted"
    ),
    offset: int = Query(default=0, ge=0),
) -> list[EntryWithAuthor]:
    """Public directory of approved entries, newest first."""
    return EntryService(session).list_approved(q=q, limit=limit, offset=offset)


@router.post("", response_model=EntryPublic, status_code=status.HTTP_201_CREATED)
def create_entry(session: SessionDep, auth: AuthDep, entry_in: EntryCreate) -> WikiEntry:
    """Create an entry on the caller's profile. It starts pending moderation."""
    return EntryService(session).create_entry(auth, entry_in)


@router.get("/{entry_id}", response_model=EntryPublic)
def read_entry(session: SessionDep, auth: AuthDep, entry_id: uuid.UUID) -> WikiEntry:
    return EntryService(session).get_visible_entry(auth, entry_id)


@router.patch("/{entry_id}", response_model=EntryPublic)
def update_entry(
    session: SessionDep,
    auth: AuthDep,
    entry_id: uuid.UUID,
    entry_in: EntryContentUpdate,
) -> WikiEntry:
    """
    Edit an own entry's content. Any status in the body is ignored and the
    entry goes back to pending for re-moderation.
    """
    return EntryService(session).update_content(auth, entry_id, entry_in)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(session: SessionDep, auth: AuthDep, entry_id: uuid.UUID) -> Response:
    EntryService(session).delete_own_entry(auth, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

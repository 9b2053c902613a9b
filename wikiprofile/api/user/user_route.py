"""API routes for users and profiles."""

import uuid

from fastapi import APIRouter

from wikiprofile.api.entry.entry_schema import UserProfile
from wikiprofile.api.entry.entry_service import EntryService
from wikiprofile.api.user import user_service
from wikiprofile.api.user.user_model import User
from wikiprofile.api.user.user_schema import (
    UserPublic,
    UserUpdateMe,
    UserWithEntryCount,
)
from wikiprofile.utils.deps import AuthDep, CurrentUser, SessionDep

router = APIRouter(tags=["users"])


@router.get("/users", response_model=list[UserWithEntryCount])
def list_users(session: SessionDep, _auth: AuthDep) -> list[UserWithEntryCount]:
    """Directory of users, newest first, with their entry counts."""
    return user_service.list_users_with_counts(session=session)


@router.get("/users/me", response_model=UserPublic)
def read_user_me(current_user: CurrentUser) -> User:
    """Get the current user."""
    return current_user


@router.patch("/users/me", response_model=UserPublic)
def update_user_me(
    session: SessionDep, current_user: CurrentUser, user_in: UserUpdateMe
) -> User:
    """Update own profile fields (name, bio, profile image)."""
    return user_service.update_me(session=session, user=current_user, user_in=user_in)


@router.get("/profile/{user_id}", response_model=UserProfile)
def read_profile(session: SessionDep, auth: AuthDep, user_id: uuid.UUID) -> UserProfile:
    """
    A user's profile page. The owner sees all of their entries;
    everyone else sees approved entries only.
    """
    return EntryService(session).get_profile(auth, user_id)

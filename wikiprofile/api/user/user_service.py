import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from wikiprofile.api.auth.auth_context import AuthContext, ensure_admin
from wikiprofile.api.entry.entry_model import WikiEntry
from wikiprofile.api.user.user_model import Role, User
from wikiprofile.api.user.user_schema import (
    UserCreate,
    UserSignup,
    UserUpdateMe,
    UserWithEntryCount,
)
from wikiprofile.core.config import settings
from wikiprofile.core.errors import NotFoundError, ValidationError
from wikiprofile.core.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def create_user(*, session: Session, user_create: UserCreate) -> User:
    hashed_password = (
        get_password_hash(user_create.password) if user_create.password else None
    )
    db_obj = User.model_validate(
        user_create,
        update={"hashed_password": hashed_password},
    )
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    logger.info(f"Created user {db_obj.id} ({db_obj.username or db_obj.email}) as {db_obj.role.value}")
    return db_obj


def signup_local_user(*, session: Session, user_in: UserSignup) -> User:
    """Register a username/password account with the default role."""
    if get_user_by_username(session=session, username=user_in.username):
        raise ValidationError("Username already exists")

    user_create = UserCreate(
        username=user_in.username,
        email=f"{user_in.username}@{settings.LOCAL_EMAIL_DOMAIN}",
        password=user_in.password,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        role=Role.USER,
    )
    try:
        return create_user(session=session, user_create=user_create)
    except IntegrityError:
        # lost a race with a concurrent signup for the same username
        session.rollback()
        raise ValidationError("Username already exists")


def get_user(*, session: Session, user_id: uuid.UUID) -> User:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(*, session: Session, username: str) -> User | None:
    statement = select(User).where(User.username == username)
    return session.exec(statement).first()


def authenticate(*, session: Session, username: str, password: str) -> User | None:
    db_user = get_user_by_username(session=session, username=username)
    if not db_user or not db_user.hashed_password:
        return None
    if not verify_password(password, db_user.hashed_password):
        return None
    return db_user


def update_me(*, session: Session, user: User, user_in: UserUpdateMe) -> User:
    user_data = user_in.model_dump(exclude_unset=True)
    user.sqlmodel_update(user_data, update={"updated_at": datetime.now(timezone.utc)})
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def list_users(*, session: Session) -> list[User]:
    statement = select(User).order_by(col(User.created_at).desc())
    return list(session.exec(statement).all())


def list_users_with_counts(*, session: Session) -> list[UserWithEntryCount]:
    """All users, newest first, each with the number of entries they own."""
    statement: Any = (
        select(User, func.count(col(WikiEntry.id)))
        .outerjoin(WikiEntry, col(WikiEntry.user_id) == col(User.id))
        .group_by(col(User.id))
        .order_by(col(User.created_at).desc())
    )
    rows = session.exec(statement).all()
    return [
        UserWithEntryCount.model_validate(user, update={"entry_count": count})
        for user, count in rows
    ]


def update_role(
    *, session: Session, actor: AuthContext, user_id: uuid.UUID, role: Role
) -> User:
    """Assign a role to a user."""
    ensure_admin(actor)
    user = get_user(session=session, user_id=user_id)
    previous = user.role
    user.role = role
    user.updated_at = datetime.now(timezone.utc)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(
        f"User {user.id} role changed {previous.value} -> {role.value} by {actor.user_id}"
    )
    return user

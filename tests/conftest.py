"""
tests/conftest.py
"""
from __future__ import annotations

import datetime as _dt
from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import wikiprofile.db.base  # noqa: F401  (registers every table)
from wikiprofile.api.entry.entry_model import EntryStatus, WikiEntry
from wikiprofile.api.user.user_model import Role, User
from wikiprofile.core.security import create_access_token
from wikiprofile.main import app
from wikiprofile.utils.deps import get_db

API = "/api"


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """A fresh in-memory database per test, shared by the test and the app."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Test client bound to the test session. The lifespan is not entered, so
    the configured database is never touched.
    """

    def _get_db_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = _get_db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


# ───────────────────────── factories ──────────────────────────────────
@pytest.fixture
def make_user(session: Session) -> Callable[..., User]:
    def _make(username: str, role: Role = Role.USER, **fields: Any) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            first_name=fields.pop("first_name", username.capitalize()),
            last_name=fields.pop("last_name", "Tester"),
            role=role,
            **fields,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_entry(session: Session) -> Callable[..., WikiEntry]:
    base = _dt.datetime(2030, 1, 1, tzinfo=_dt.timezone.utc)
    counter = iter(range(10_000))

    def _make(
        owner: User,
        title: str = "Entry",
        status: EntryStatus = EntryStatus.PENDING,
        description: str = "A description long enough",
        **fields: Any,
    ) -> WikiEntry:
        # strictly increasing timestamps, so "newest first" is deterministic
        created = base + _dt.timedelta(minutes=next(counter))
        entry = WikiEntry(
            user_id=owner.id,
            title=title,
            description=description,
            status=status,
            created_at=created,
            updated_at=created,
            **fields,
        )
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    return _make


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        user.id, expires_delta=_dt.timedelta(minutes=5), role=user.role.value
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture
def admin(make_user: Callable[..., User]) -> User:
    return make_user("root", role=Role.ADMIN)

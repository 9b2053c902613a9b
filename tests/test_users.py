"""
tests/test_users.py
"""
from __future__ import annotations

from conftest import API, auth_headers
from sqlmodel import select

from wikiprofile.api.entry.entry_model import EntryStatus
from wikiprofile.api.user.user_model import Role, User
from wikiprofile.core.config import settings
from wikiprofile.core.security import verify_password
from wikiprofile.db.session import init_db


def test_user_directory_has_entry_counts(client, alice, bob, make_entry):
    make_entry(alice)
    make_entry(alice, status=EntryStatus.APPROVED)

    rv = client.get(f"{API}/users", headers=auth_headers(bob))
    assert rv.status_code == 200
    counts = {u["username"]: u["entry_count"] for u in rv.json()}
    assert counts == {"alice": 2, "bob": 0}


def test_user_directory_requires_authentication(client):
    assert client.get(f"{API}/users").status_code == 401


def test_read_me(client, alice):
    rv = client.get(f"{API}/users/me", headers=auth_headers(alice))
    assert rv.status_code == 200
    body = rv.json()
    assert body["id"] == str(alice.id)
    assert body["role"] == "user"
    assert body["is_admin"] is False


def test_update_me_profile_fields(client, session, alice):
    rv = client.patch(
        f"{API}/users/me",
        json={
            "bio": "Collector of facts",
            "profile_image_url": "https://img.example/me.png",
            "first_name": "Alicia",
        },
        headers=auth_headers(alice),
    )
    assert rv.status_code == 200
    assert rv.json()["bio"] == "Collector of facts"
    assert rv.json()["first_name"] == "Alicia"
    assert rv.json()["last_name"] == "Tester"


def test_update_me_cannot_change_role(client, session, alice):
    rv = client.patch(
        f"{API}/users/me", json={"role": "admin"}, headers=auth_headers(alice)
    )
    assert rv.status_code == 200
    assert rv.json()["role"] == "user"
    session.refresh(alice)
    assert alice.role == Role.USER


def test_is_admin_follows_role(client, admin):
    rv = client.get(f"{API}/users/me", headers=auth_headers(admin))
    assert rv.json()["role"] == "admin"
    assert rv.json()["is_admin"] is True


def test_init_db_creates_first_superuser(session):
    init_db(session)
    init_db(session)  # idempotent

    users = session.exec(
        select(User).where(User.username == settings.FIRST_SUPERUSER)
    ).all()
    assert len(users) == 1
    assert users[0].role == Role.ADMIN
    assert verify_password(settings.FIRST_SUPERUSER_PASSWORD, users[0].hashed_password)


def test_init_db_restores_superuser_role(session, make_user):
    make_user(settings.FIRST_SUPERUSER, role=Role.USER)
    init_db(session)
    user = session.exec(
        select(User).where(User.username == settings.FIRST_SUPERUSER)
    ).one()
    assert user.role == Role.ADMIN


def test_health_check(client):
    rv = client.get(f"{API}/utils/health-check/")
    assert rv.status_code == 200
    assert rv.json() is True

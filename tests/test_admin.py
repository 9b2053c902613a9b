"""
tests/test_admin.py

Admin moderation, admin deletes and role management.
"""
from __future__ import annotations

import uuid

import pytest
from conftest import API, auth_headers

from wikiprofile.api.entry.entry_model import EntryStatus, WikiEntry
from wikiprofile.api.user.user_model import Role


def _moderate(client, user, entry_id, status, reason=None):
    body = {"status": status}
    if reason is not None:
        body["reason"] = reason
    return client.patch(
        f"{API}/admin/entries/{entry_id}/moderate",
        json=body,
        headers=auth_headers(user),
    )


# ───────────────────────── moderation ─────────────────────────────────
@pytest.mark.parametrize("current", list(EntryStatus))
@pytest.mark.parametrize("target", ["pending", "approved", "rejected"])
def test_admin_moderates_between_any_statuses(client, alice, admin, make_entry, current, target):
    entry = make_entry(alice, status=current)
    rv = _moderate(client, admin, entry.id, target)
    assert rv.status_code == 200
    assert rv.json()["status"] == target


def test_admin_can_moderate_own_entry(client, admin, make_entry):
    entry = make_entry(admin)
    assert _moderate(client, admin, entry.id, "approved").status_code == 200


@pytest.mark.parametrize("role", [Role.USER, Role.MODERATOR])
def test_non_admin_moderation_is_forbidden(client, session, alice, make_user, make_entry, role):
    actor = make_user("actor", role=role)
    entry = make_entry(alice)
    rv = _moderate(client, actor, entry.id, "approved")
    assert rv.status_code == 403
    session.refresh(entry)
    assert entry.status == EntryStatus.PENDING


def test_owner_cannot_moderate_own_entry(client, alice, make_entry):
    entry = make_entry(alice)
    assert _moderate(client, alice, entry.id, "approved").status_code == 403


def test_moderation_requires_authentication(client, alice, make_entry):
    entry = make_entry(alice)
    rv = client.patch(
        f"{API}/admin/entries/{entry.id}/moderate", json={"status": "approved"}
    )
    assert rv.status_code == 401


@pytest.mark.parametrize("status", ["published", "", "APPROVED", None])
def test_invalid_status_is_rejected(client, session, alice, admin, make_entry, status):
    entry = make_entry(alice)
    rv = _moderate(client, admin, entry.id, status)
    assert rv.status_code == 400
    session.refresh(entry)
    assert entry.status == EntryStatus.PENDING


def test_moderate_missing_entry(client, admin):
    assert _moderate(client, admin, uuid.uuid4(), "approved").status_code == 404


def test_rejection_reason_is_recorded(client, alice, admin, make_entry):
    entry = make_entry(alice)
    rv = _moderate(client, admin, entry.id, "rejected", reason="Needs sources")
    assert rv.status_code == 200
    assert rv.json()["moderation_note"] == "Needs sources"
    assert rv.json()["moderated_at"] is not None


def test_approval_replaces_previous_reason(client, alice, admin, make_entry):
    entry = make_entry(alice)
    _moderate(client, admin, entry.id, "rejected", reason="Needs sources")
    rv = _moderate(client, admin, entry.id, "approved")
    assert rv.json()["status"] == "approved"
    assert rv.json()["moderation_note"] is None


# ───────────────────────── listings ───────────────────────────────────
def test_admin_lists_all_entries_with_authors(client, alice, bob, admin, make_entry):
    make_entry(alice, title="a1")
    make_entry(bob, title="b1", status=EntryStatus.REJECTED)
    make_entry(alice, title="a2", status=EntryStatus.APPROVED)

    rv = client.get(f"{API}/admin/entries", headers=auth_headers(admin))
    assert rv.status_code == 200
    entries = rv.json()
    assert [e["title"] for e in entries] == ["a2", "b1", "a1"]
    assert entries[1]["user"]["username"] == "bob"


def test_admin_filters_entries_by_status(client, alice, admin, make_entry):
    make_entry(alice, title="p")
    make_entry(alice, title="r", status=EntryStatus.REJECTED)
    rv = client.get(
        f"{API}/admin/entries", params={"status": "rejected"}, headers=auth_headers(admin)
    )
    assert [e["title"] for e in rv.json()] == ["r"]

    rv = client.get(
        f"{API}/admin/entries", params={"status": "bogus"}, headers=auth_headers(admin)
    )
    assert rv.status_code == 400


def test_admin_moderation_queue_pages_past_first_page(client, alice, admin, make_entry):
    pending = [str(make_entry(alice, title=f"p{i}").id) for i in range(7)]
    make_entry(alice, title="done", status=EntryStatus.APPROVED)

    def page(**params):
        rv = client.get(
            f"{API}/admin/entries",
            params={"status": "pending", **params},
            headers=auth_headers(admin),
        )
        assert rv.status_code == 200
        return [e["id"] for e in rv.json()]

    assert page() == pending[::-1]
    pages = page(limit=3) + page(limit=3, offset=3) + page(limit=3, offset=6)
    assert pages == pending[::-1]
    assert page(limit=3, offset=6) == [pending[0]]


def test_admin_listing_is_forbidden_for_users(client, alice):
    rv = client.get(f"{API}/admin/entries", headers=auth_headers(alice))
    assert rv.status_code == 403


def test_moderation_stats(client, alice, admin, make_entry):
    make_entry(alice)
    make_entry(alice)
    make_entry(alice, status=EntryStatus.APPROVED)
    make_entry(alice, status=EntryStatus.REJECTED)

    rv = client.get(f"{API}/admin/entries/stats", headers=auth_headers(admin))
    assert rv.status_code == 200
    assert rv.json() == {"pending": 2, "approved": 1, "rejected": 1, "total": 4}

    assert client.get(f"{API}/admin/entries/stats", headers=auth_headers(alice)).status_code == 403


# ───────────────────────── admin delete ───────────────────────────────
def test_admin_deletes_any_entry(client, session, alice, admin, make_entry):
    entry = make_entry(alice, status=EntryStatus.APPROVED)
    entry_id = entry.id
    rv = client.delete(f"{API}/admin/entries/{entry_id}", headers=auth_headers(admin))
    assert rv.status_code == 204
    session.expire_all()
    assert session.get(WikiEntry, entry_id) is None


def test_admin_delete_is_forbidden_for_users(client, session, alice, bob, make_entry):
    entry = make_entry(alice)
    rv = client.delete(f"{API}/admin/entries/{entry.id}", headers=auth_headers(bob))
    assert rv.status_code == 403
    assert session.get(WikiEntry, entry.id) is not None


def test_admin_delete_missing_entry(client, admin):
    rv = client.delete(f"{API}/admin/entries/{uuid.uuid4()}", headers=auth_headers(admin))
    assert rv.status_code == 404


# ───────────────────────── users & roles ──────────────────────────────
def test_admin_lists_users(client, alice, bob, admin):
    rv = client.get(f"{API}/admin/users", headers=auth_headers(admin))
    assert rv.status_code == 200
    assert {u["username"] for u in rv.json()} == {"alice", "bob", "root"}
    assert all("hashed_password" not in u for u in rv.json())


def test_admin_users_forbidden_for_users(client, alice):
    assert client.get(f"{API}/admin/users", headers=auth_headers(alice)).status_code == 403


@pytest.mark.parametrize("role", ["user", "moderator", "admin"])
def test_admin_assigns_role(client, session, alice, admin, role):
    rv = client.patch(
        f"{API}/admin/users/{alice.id}/role",
        json={"role": role},
        headers=auth_headers(admin),
    )
    assert rv.status_code == 200
    assert rv.json()["role"] == role
    assert rv.json()["is_admin"] is (role == "admin")
    session.refresh(alice)
    assert alice.role == Role(role)


@pytest.mark.parametrize("role", ["superuser", "guest", "ADMIN", "", None])
def test_invalid_role_is_rejected(client, session, alice, admin, role):
    rv = client.patch(
        f"{API}/admin/users/{alice.id}/role",
        json={"role": role},
        headers=auth_headers(admin),
    )
    assert rv.status_code == 400
    session.refresh(alice)
    assert alice.role == Role.USER


def test_role_update_forbidden_for_non_admin(client, session, alice, bob):
    rv = client.patch(
        f"{API}/admin/users/{bob.id}/role",
        json={"role": "admin"},
        headers=auth_headers(alice),
    )
    assert rv.status_code == 403
    session.refresh(bob)
    assert bob.role == Role.USER


def test_role_update_unknown_user(client, admin):
    rv = client.patch(
        f"{API}/admin/users/{uuid.uuid4()}/role",
        json={"role": "admin"},
        headers=auth_headers(admin),
    )
    assert rv.status_code == 404


def test_promoted_user_can_moderate(client, alice, bob, admin, make_entry):
    entry = make_entry(alice)
    assert _moderate(client, bob, entry.id, "approved").status_code == 403
    client.patch(
        f"{API}/admin/users/{bob.id}/role",
        json={"role": "admin"},
        headers=auth_headers(admin),
    )
    assert _moderate(client, bob, entry.id, "approved").status_code == 200

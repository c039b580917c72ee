"""Tests for the /api/users routes."""
from __future__ import annotations


def test_get_me(client, alice):
    response = client.get("/api/users/me", headers=alice)

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "alice@example.org"


def test_update_me(client, alice):
    response = client.put(
        "/api/users/me",
        json={"full_name": "Alice Martin", "organization": "ECCC", "email": "a.martin@example.org"},
        headers=alice,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["full_name"] == "Alice Martin"
    assert data["organization"] == "ECCC"
    assert data["email"] == "a.martin@example.org"


def test_update_me_email_taken(client, alice, bob):
    response = client.put("/api/users/me", json={"email": "bob@example.org"}, headers=alice)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


def test_change_password(client, alice):
    response = client.post(
        "/api/users/me/change-password",
        json={"current_password": "correct-horse-battery", "new_password": "new-password-123"},
        headers=alice,
    )
    assert response.status_code == 200

    old = client.post("/api/auth/login", json={"username": "alice", "password": "correct-horse-battery"})
    new = client.post("/api/auth/login", json={"username": "alice", "password": "new-password-123"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_wrong_current(client, alice):
    response = client.post(
        "/api/users/me/change-password",
        json={"current_password": "not-my-password", "new_password": "new-password-123"},
        headers=alice,
    )

    assert response.status_code == 400
    assert response.json()["error"] == {"message": "Current password is incorrect", "code": "VALIDATION_ERROR"}


def test_change_password_too_short(client, alice):
    response = client.post(
        "/api/users/me/change-password",
        json={"current_password": "correct-horse-battery", "new_password": "short"},
        headers=alice,
    )

    assert response.status_code == 400


def test_delete_me_cascades_to_packages(client, alice, notification_id, db_session):
    from basel_compliance.db.models import BaselNotification, SubmissionPackage

    response = client.delete("/api/users/me", headers=alice)

    assert response.status_code == 200
    assert db_session.query(SubmissionPackage).count() == 0
    assert db_session.query(BaselNotification).count() == 0


def test_list_users_requires_admin(client, alice):
    response = client.get("/api/users", headers=alice)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_list_users_as_admin(client, alice, bob, admin):
    response = client.get("/api/users", headers=admin)

    assert response.status_code == 200
    usernames = {u["username"] for u in response.json()["data"]}
    assert usernames == {"alice", "bob", "root_admin"}

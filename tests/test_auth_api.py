"""Tests for registration, login and bearer authentication.

Covers:
- POST /api/auth/register
- POST /api/auth/login
- GET  /api/auth/me
- get_current_user rejections (missing, malformed, expired, orphaned tokens)
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import jwt

from basel_compliance.core.settings import get_settings


def test_register_returns_user_without_hash(client):
    response = client.post(
        "/api/auth/register",
        json={
            "username": "alice",
            "password": "correct-horse-battery",
            "email": "alice@example.org",
            "full_name": "Alice Martin",
            "organization": "Northern Battery Recycling",
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["username"] == "alice"
    assert data["organization"] == "Northern Battery Recycling"
    assert data["role"] == "user"
    assert "password_hash" not in data
    assert "password" not in data


def test_register_duplicate_username_conflicts(client, alice):
    response = client.post("/api/auth/register", json={"username": "alice", "password": "another-password"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


def test_register_duplicate_email_conflicts(client, alice):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice2", "password": "another-password", "email": "alice@example.org"},
    )

    assert response.status_code == 409


def test_register_validation_uses_400(client):
    response = client.post("/api/auth/register", json={"username": "al", "password": "short"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "username" in error["message"]
    assert "password" in error["message"]


def test_login_returns_token_and_user(client, alice):
    response = client.post("/api/auth/login", json={"username": "alice", "password": "correct-horse-battery"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["username"] == "alice"


def test_login_wrong_password(client, alice):
    response = client.post("/api/auth/login", json={"username": "alice", "password": "nope-nope-nope"})

    assert response.status_code == 401
    assert response.json()["error"] == {"message": "Invalid username or password", "code": "UNAUTHORIZED"}


def test_login_unknown_user(client):
    response = client.post("/api/auth/login", json={"username": "ghost", "password": "whatever-123"})

    assert response.status_code == 401


def test_me_returns_caller(client, alice):
    response = client.get("/api/auth/me", headers=alice)

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "alice"


def test_missing_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
    assert response.headers["www-authenticate"] == "Bearer"


def test_wrong_scheme(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Basic YWxpY2U6cGFzcw=="})

    assert response.status_code == 401


def test_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"


def test_expired_token(client, alice):
    settings = get_settings()
    past = datetime.now(timezone.utc) - timedelta(days=30)
    token = jwt.encode(
        {"sub": str(uuid4()), "username": "alice", "iat": past, "exp": past + timedelta(minutes=5)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_token_for_deleted_user(client, alice):
    assert client.delete("/api/users/me", headers=alice).status_code == 200

    response = client.get("/api/auth/me", headers=alice)

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "User not found"

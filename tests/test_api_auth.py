# tests/test_api_auth.py

from __future__ import annotations

from taskboard.config import settings

from .factories import PASSWORD


def register(client, email: str = "carol@example.com", **extra):
    body = {"name": "Carol", "email": email, "password": "hunter22", **extra}
    return client.post("/api/auth/register", json=body)


def test_register_returns_member_token(client) -> None:
    res = register(client)

    assert res.status_code == 201
    body = res.json()
    assert body["role"] == "member"
    assert body["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "carol@example.com"
    assert "password" not in me.json()


def test_duplicate_email_is_rejected(client) -> None:
    register(client)
    res = register(client)
    assert res.status_code == 400
    assert res.json() == {"message": "User already exists"}


def test_invalid_email_is_rejected(client) -> None:
    assert register(client, email="not-an-email").status_code == 400


def test_admin_invite_token(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_invite_token", "invite-me")

    wrong = register(client, adminInviteToken="guess")
    assert wrong.status_code == 400

    res = register(client, adminInviteToken="invite-me")
    assert res.status_code == 201
    assert res.json()["role"] == "admin"


def test_invite_token_rejected_when_not_configured(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_invite_token", "")
    assert register(client, adminInviteToken="anything").status_code == 400


def test_login_with_password_form(client, users) -> None:
    res = client.post(
        "/api/auth/token",
        data={"username": "alice@example.com", "password": PASSWORD},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["user_id"] == users.alice.id
    assert body["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["id"] == users.alice.id

    bad = client.post(
        "/api/auth/token",
        data={"username": "alice@example.com", "password": "wrong"},
    )
    assert bad.status_code == 401
    assert bad.json() == {"message": "Invalid email or password"}

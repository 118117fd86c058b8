# tests/v1/test_auth.py
"""Tests for registration and login endpoints."""

from fastapi import status


def test_register_returns_identity(client) -> None:
    response = client.post(
        "/auth/register",
        json={"displayName": "alice", "avatar": "🙂", "credential": "pw"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    identity = response.json()["identity"]
    assert identity["displayName"] == "alice"
    assert identity["avatar"] == "🙂"
    assert identity["points"] == 0
    assert identity["ownedTaleIds"] == []
    assert identity["followingIds"] == []
    assert "credentialSecret" not in identity
    assert identity["id"]


def test_register_duplicate_name(client, alice) -> None:
    response = client.post("/auth/register", json={"displayName": "alice", "credential": "x"})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "User exists"


def test_register_admin_name_is_reserved(client) -> None:
    response = client.post("/auth/register", json={"displayName": "admin"})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_register_requires_display_name(client) -> None:
    response = client.post("/auth/register", json={"avatar": "🙂"})
    assert response.status_code == 422

    response = client.post("/auth/register", json={"displayName": "   "})
    assert response.status_code == 422


def test_login_returns_token(client, alice) -> None:
    response = client.post("/auth/login", json={"displayName": "alice", "credential": "pw"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["isAdmin"] is False
    assert len(data["token"]) == 32
    # every login issues a distinct token
    assert data["token"] != alice["token"]


def test_login_wrong_credential(client, alice) -> None:
    response = client.post("/auth/login", json={"displayName": "alice", "credential": "nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(client) -> None:
    response = client.post("/auth/login", json={"displayName": "ghost", "credential": "pw"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_passwordless_login(client, register_user) -> None:
    carol = register_user("carol", credential=None)
    assert carol["token"]


def test_admin_login_through_auth_endpoint(client, test_settings) -> None:
    response = client.post(
        "/auth/login",
        json={"displayName": test_settings.admin_username, "credential": test_settings.admin_secret},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["isAdmin"] is True


def test_admin_login_endpoint(client, test_settings) -> None:
    response = client.post("/admin/login", json={"credential": test_settings.admin_secret})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["adminToken"]

    response = client.post("/admin/login", json={"credential": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_ignores_surrounding_whitespace(client, alice) -> None:
    response = client.post("/auth/login", json={"displayName": " alice ", "credential": "pw"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["isAdmin"] is False

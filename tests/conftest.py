# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from zcode_stage.core.settings import Settings
from zcode_stage.main import create_app
from zcode_stage.state import AppState

ADMIN_SECRET = "test-admin-secret"
SUBMISSION_REWARD = 5
APPROVAL_REWARD = 2
MESSAGE_REWARD = 1


class RecordingChannel:
    """Channel double that keeps every frame sent to it."""

    def __init__(self, name: str = "channel") -> None:
        self.name = name
        self.frames: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.frames.append(data)

    def of_type(self, frame_type: str) -> list[dict[str, Any]]:
        return [f for f in self.frames if f["type"] == frame_type]


class ClosedChannel(RecordingChannel):
    """Channel double whose socket has already gone away."""

    async def send_json(self, data: Any) -> None:
        raise RuntimeError('Cannot call "send" once a close message has been sent.')


@pytest.fixture()
def test_settings() -> Settings:
    """Provide settings with known rewards and operator secret."""
    return Settings(
        ADMIN_SECRET=ADMIN_SECRET,
        SUBMISSION_REWARD=SUBMISSION_REWARD,
        APPROVAL_REWARD=APPROVAL_REWARD,
        MESSAGE_REWARD=MESSAGE_REWARD,
        MAX_MESSAGE_LENGTH=200,
        MAX_CAPTION_LENGTH=100,
        MAX_MEDIA_PAYLOAD_BYTES=1024,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture()
def app(test_settings: Settings) -> FastAPI:
    """Build a fresh application, and so fresh stores, for every test."""
    return create_app(test_settings)


@pytest.fixture()
def state(app: FastAPI) -> AppState:
    return app.state.zcode


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # Entering the client shares one event loop between requests and sockets.
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_channel() -> Callable[..., RecordingChannel]:
    return RecordingChannel


@pytest.fixture()
def make_closed_channel() -> Callable[..., ClosedChannel]:
    return ClosedChannel


def _register_and_login(
    client: TestClient,
    display_name: str,
    *,
    avatar: str = "🙂",
    credential: str | None = "pw",
) -> dict[str, Any]:
    body: dict[str, Any] = {"displayName": display_name, "avatar": avatar}
    if credential is not None:
        body["credential"] = credential
    r = client.post("/auth/register", json=body)
    assert r.status_code == 201, r.text
    identity = r.json()["identity"]

    login_body: dict[str, Any] = {"displayName": display_name}
    if credential is not None:
        login_body["credential"] = credential
    r = client.post("/auth/login", json=login_body)
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    return {
        "id": identity["id"],
        "identity": identity,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture()
def register_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that registers and logs in a user over HTTP."""

    def _register(display_name: str, **kwargs: Any) -> dict[str, Any]:
        return _register_and_login(client, display_name, **kwargs)

    return _register


@pytest.fixture()
def alice(register_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return register_user("alice")


@pytest.fixture()
def bob(register_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return register_user("bob", avatar="😎")


@pytest.fixture()
def admin_token(client: TestClient) -> str:
    r = client.post("/admin/login", json={"credential": ADMIN_SECRET})
    assert r.status_code == 200, r.text
    return r.json()["adminToken"]


@pytest.fixture()
def submit_tale(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that submits a tale and returns its JSON."""

    def _submit(token: str, caption: str = "hi", media_kind: str = "image") -> dict[str, Any]:
        r = client.post(
            "/tales",
            json={
                "token": token,
                "mediaPayload": "data:image/png;base64,AAAA",
                "mediaKind": media_kind,
                "caption": caption,
            },
        )
        assert r.status_code == 201, r.text
        return r.json()["tale"]

    return _submit


@pytest.fixture()
def approve(client: TestClient, admin_token: str) -> Callable[[str], dict[str, Any]]:
    def _approve(tale_id: str) -> dict[str, Any]:
        r = client.post("/admin/approve", json={"adminToken": admin_token, "taleId": tale_id})
        assert r.status_code == 200, r.text
        return r.json()["tale"]

    return _approve

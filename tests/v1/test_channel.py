# tests/v1/test_channel.py
"""Tests for the WebSocket channel: presence, chat and live feed updates."""

from fastapi import status


def _register(ws, user) -> dict:
    ws.send_json({"type": "register", "token": user["token"]})
    welcome = ws.receive_json()
    assert welcome["type"] == "welcome"
    return welcome


def _online(frame) -> set[str]:
    return {i["displayName"] for i in frame["identities"] if i["online"]}


def test_register_sends_welcome_then_presence(client, alice) -> None:
    with client.websocket_connect("/ws") as ws:
        welcome = _register(ws, alice)
        presence = ws.receive_json()

    summary = welcome["identitySummary"]
    assert summary["id"] == alice["id"]
    assert summary["displayName"] == "alice"
    assert summary["online"] is True
    assert presence["type"] == "presence"
    assert _online(presence) == {"alice"}


def test_presence_reaches_other_channels(client, alice, bob) -> None:
    with client.websocket_connect("/ws") as alice_ws:
        _register(alice_ws, alice)
        assert _online(alice_ws.receive_json()) == {"alice"}

        with client.websocket_connect("/ws") as bob_ws:
            _register(bob_ws, bob)
            assert _online(bob_ws.receive_json()) == {"alice", "bob"}
            assert _online(alice_ws.receive_json()) == {"alice", "bob"}

        # bob's channel closed
        assert _online(alice_ws.receive_json()) == {"alice"}


def test_bad_token_reports_error(client) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "register", "token": "bogus"})
        assert ws.receive_json() == {"type": "error", "reason": "Unauthorized"}


def test_malformed_frames_keep_channel_open(client, alice) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_text("not json")
        assert ws.receive_json()["reason"] == "Frame is not valid JSON"

        ws.send_json({"type": "dance"})
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"type": "chat", "token": alice["token"]})
        assert ws.receive_json()["type"] == "error"

        _register(ws, alice)
        assert ws.receive_json()["type"] == "presence"


def test_chat_delivery_and_ack(client, alice, bob) -> None:
    with client.websocket_connect("/ws") as alice_ws, client.websocket_connect("/ws") as bob_ws:
        _register(alice_ws, alice)
        alice_ws.receive_json()
        _register(bob_ws, bob)
        bob_ws.receive_json()
        alice_ws.receive_json()

        alice_ws.send_json({"type": "chat", "token": alice["token"], "toId": bob["id"], "text": "yo"})

        delivered = bob_ws.receive_json()
        assert delivered["type"] == "chat"
        assert delivered["message"]["fromId"] == alice["id"]
        assert delivered["message"]["toId"] == bob["id"]
        assert delivered["message"]["text"] == "yo"

        ack = alice_ws.receive_json()
        assert ack["type"] == "chat_ack"
        assert ack["message"]["id"] == delivered["message"]["id"]


def test_chat_to_unknown_recipient(client, alice) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "chat", "token": alice["token"], "toId": "ghost", "text": "hi"})
        assert ws.receive_json() == {"type": "error", "reason": "Recipient not found"}


def test_chat_text_validation(client, alice, bob, test_settings) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "chat", "token": alice["token"], "toId": bob["id"], "text": "  "})
        assert ws.receive_json()["type"] == "error"

        too_long = "x" * (test_settings.max_message_length + 1)
        ws.send_json({"type": "chat", "token": alice["token"], "toId": bob["id"], "text": too_long})
        assert ws.receive_json()["type"] == "error"


def test_approval_broadcasts_to_channels(client, alice, bob, submit_tale, admin_token) -> None:
    tale = submit_tale(alice["token"], caption="look")

    with client.websocket_connect("/ws") as ws:
        _register(ws, bob)
        ws.receive_json()

        response = client.post("/admin/approve", json={"adminToken": admin_token, "taleId": tale["id"]})
        assert response.status_code == status.HTTP_200_OK

        frame = ws.receive_json()
        assert frame["type"] == "tale_approved"
        assert frame["tale"]["id"] == tale["id"]
        assert frame["tale"]["approved"] is True
        assert frame["tale"]["caption"] == "look"


def test_newer_channel_replaces_older(client, alice, bob, state) -> None:
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        _register(first, alice)
        first.receive_json()
        _register(second, alice)
        second.receive_json()

        with client.websocket_connect("/ws") as bob_ws:
            bob_ws.send_json({"type": "chat", "token": bob["token"], "toId": alice["id"], "text": "hi"})
            assert bob_ws.receive_json()["type"] == "chat_ack"

        # delivery goes to the latest registration only
        assert second.receive_json()["message"]["text"] == "hi"
        assert state.presence.is_online(alice["id"])

    assert not state.presence.is_online(alice["id"])

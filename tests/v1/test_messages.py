# tests/v1/test_messages.py
"""Tests for the conversation history endpoints."""

from fastapi import status


def _chat(client, sender, recipient, text: str) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "chat", "token": sender["token"], "toId": recipient["id"], "text": text})
        assert ws.receive_json()["type"] == "chat_ack"


def test_conversation_is_shared_and_ordered(client, alice, bob) -> None:
    _chat(client, alice, bob, "one")
    _chat(client, bob, alice, "two")
    _chat(client, alice, bob, "three")

    from_alice = client.get(f"/messages/{bob['id']}", headers=alice["headers"])
    from_bob = client.get(f"/messages/{alice['id']}", headers=bob["headers"])

    assert from_alice.status_code == status.HTTP_200_OK
    assert [m["text"] for m in from_alice.json()] == ["one", "two", "three"]
    assert from_alice.json() == from_bob.json()
    assert from_alice.json()[1]["fromId"] == bob["id"]


def test_conversations_keyed_by_partner(client, alice, bob, register_user) -> None:
    carol = register_user("carol")
    _chat(client, alice, bob, "hi bob")
    _chat(client, carol, alice, "hi alice")

    response = client.get("/messages", headers=alice["headers"])

    assert response.status_code == status.HTTP_200_OK
    conversations = response.json()
    assert set(conversations) == {bob["id"], carol["id"]}
    assert conversations[carol["id"]][0]["text"] == "hi alice"

    assert set(client.get("/messages", headers=bob["headers"]).json()) == {alice["id"]}


def test_messages_award_sender(client, alice, bob, test_settings) -> None:
    _chat(client, alice, bob, "hi")
    _chat(client, alice, bob, "again")

    me = client.get("/users/me", headers=alice["headers"]).json()
    assert me["points"] == 2 * test_settings.message_reward
    assert client.get("/users/me", headers=bob["headers"]).json()["points"] == 0


def test_conversation_errors(client, alice) -> None:
    assert client.get("/messages").status_code == status.HTTP_401_UNAUTHORIZED

    response = client.get("/messages/missing", headers=alice["headers"])
    assert response.status_code == status.HTTP_404_NOT_FOUND

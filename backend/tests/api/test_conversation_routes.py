"""Conversation Routes — open-on-first-message, threads, persisted accept/deny and listings."""

from campuspool.core.conversation_keys import conversation_key
from tests.api.helpers import sign_up


async def _send(client, headers, key, content, other_id=None):
    payload = {"content": content}
    if other_id:
        payload["otherUserId"] = other_id
    return await client.post(
        f"/api/v1/conversations/{key}/messages", json=payload, headers=headers,
    )


async def test_first_message_opens_conversation(client, ada, ben):
    ada_user, ada_headers = ada
    ben_user, ben_headers = ben
    key = conversation_key(ada_user["id"], ben_user["id"])

    res = await _send(client, ada_headers, key, "  Need a ride Friday?  ", ben_user["id"])

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Message sent successfully"
    assert body["data"]["content"] == "Need a ride Friday?"
    assert body["data"]["conversationId"] == key

    [conversation] = (await client.get("/api/v1/conversations", headers=ben_headers)).json()
    assert conversation["id"] == key
    assert conversation["status"] == "pending"
    assert conversation["otherUser"]["name"] == "Ada"
    assert conversation["lastMessage"]["content"] == "Need a ride Friday?"


async def test_opening_needs_other_user_and_rejects_self(client, ada, ben):
    ada_user, ada_headers = ada
    ben_user, _ = ben
    key = conversation_key(ada_user["id"], ben_user["id"])

    missing = await _send(client, ada_headers, key, "hi")
    assert missing.status_code == 400

    own_key = conversation_key(ada_user["id"], ada_user["id"])
    self_message = await _send(client, ada_headers, own_key, "hi", ada_user["id"])
    assert self_message.status_code == 400


async def test_thread_is_ascending_and_participant_only(client, ada, ben):
    ada_user, ada_headers = ada
    ben_user, ben_headers = ben
    key = conversation_key(ada_user["id"], ben_user["id"])
    await _send(client, ada_headers, key, "one", ben_user["id"])
    await _send(client, ben_headers, key, "two")

    thread = await client.get(f"/api/v1/conversations/{key}/messages", headers=ada_headers)
    assert [m["content"] for m in thread.json()] == ["one", "two"]

    _, cy_headers = await sign_up(client, "Cy")
    outsider = await client.get(f"/api/v1/conversations/{key}/messages", headers=cy_headers)
    assert outsider.status_code == 403


async def test_accept_deny_is_persisted(client, ada, ben):
    ada_user, ada_headers = ada
    ben_user, ben_headers = ben
    key = conversation_key(ada_user["id"], ben_user["id"])
    await _send(client, ada_headers, key, "hi", ben_user["id"])

    accepted = await client.put(
        f"/api/v1/conversations/{key}", json={"status": "accepted"}, headers=ben_headers,
    )
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    flip = await client.put(
        f"/api/v1/conversations/{key}", json={"status": "denied"}, headers=ben_headers,
    )
    assert flip.status_code == 409

    [conversation] = (await client.get("/api/v1/conversations", headers=ada_headers)).json()
    assert conversation["status"] == "accepted"


async def test_denied_conversations_hidden_by_default(client, ada, ben):
    ada_user, ada_headers = ada
    ben_user, ben_headers = ben
    key = conversation_key(ada_user["id"], ben_user["id"])
    await _send(client, ada_headers, key, "hi", ben_user["id"])
    await client.put(
        f"/api/v1/conversations/{key}", json={"status": "denied"}, headers=ben_headers,
    )

    hidden = await client.get("/api/v1/conversations", headers=ben_headers)
    shown = await client.get(
        "/api/v1/conversations", params={"includeDenied": "true"}, headers=ben_headers,
    )
    assert hidden.json() == []
    assert [c["status"] for c in shown.json()] == ["denied"]

    blocked = await _send(client, ada_headers, key, "please?")
    assert blocked.status_code == 409


async def test_invalid_status_value_rejected(client, ada, ben):
    ada_user, ada_headers = ada
    ben_user, _ = ben
    key = conversation_key(ada_user["id"], ben_user["id"])
    await _send(client, ada_headers, key, "hi", ben_user["id"])

    res = await client.put(
        f"/api/v1/conversations/{key}", json={"status": "pending"}, headers=ada_headers,
    )
    assert res.status_code == 400


async def test_unknown_conversation_is_404(client, ada):
    _, headers = ada
    res = await client.get("/api/v1/conversations/nope__nobody/messages", headers=headers)
    assert res.status_code == 404

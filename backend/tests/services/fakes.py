"""Test doubles for the client-side services — a MessageSender and a FeedSource."""

from datetime import datetime, timedelta, timezone

from campuspool.core.merge_message_stream import ThreadMessage

T0 = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


class FakeSender:
    """In-memory MessageSender with switchable failures."""

    def __init__(self, server_messages=None):
        self.server_messages = list(server_messages or [])
        self.sent = []
        self.fail_send = False
        self.fail_fetch = False
        self.during_send = None
        self.after_store = None

    async def send_message(self, conversation_id, content, other_user_id=None):
        self.sent.append((conversation_id, content, other_user_id))
        if self.during_send:
            self.during_send()
        if self.fail_send:
            raise RuntimeError("network down")
        confirmed = ThreadMessage(
            id=f"m{len(self.server_messages) + 1}",
            conversation_id=conversation_id,
            sender_id="a",
            content=content,
            created_at=T0 + timedelta(minutes=len(self.server_messages)),
        )
        self.server_messages.append(confirmed)
        if self.after_store:
            self.after_store()
        return confirmed

    async def get_messages(self, conversation_id):
        if self.fail_fetch:
            raise RuntimeError("fetch failed")
        return list(self.server_messages)


class FakeFeed:
    """FeedSource returning canned snapshots and counting calls."""

    def __init__(self):
        self.calls = {"conversations": 0, "messages": 0, "requests": 0}

    async def get_conversations(self):
        self.calls["conversations"] += 1
        return [{"id": "a__b"}]

    async def get_messages(self, conversation_id):
        self.calls["messages"] += 1
        return [ThreadMessage("m1", conversation_id, "a", "hi", T0)]

    async def get_requests(self):
        self.calls["requests"] += 1
        return [{"id": "r1"}]

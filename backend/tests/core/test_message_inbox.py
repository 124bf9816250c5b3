"""Inbox Helpers — status filters, pending counts, ordering and per-peer grouping."""

from campuspool.core.message_inbox import (
    count_unread_messages,
    filter_messages_by_status,
    get_pending_requests,
    group_messages_by_conversation,
    sort_messages_by_timestamp,
)

MESSAGES = [
    {"id": "1", "sender_id": "bob", "receiver_id": "me", "status": "pending",
     "timestamp": "2025-01-10T10:00:00+00:00"},
    {"id": "2", "sender_id": "me", "receiver_id": "bob", "status": "accepted",
     "timestamp": "2025-01-10T11:00:00+00:00"},
    {"id": "3", "sender_id": "cy", "receiver_id": "me", "status": "pending",
     "timestamp": "2025-01-09T09:00:00+00:00"},
    {"id": "4", "sender_id": "cy", "receiver_id": "me", "status": "read",
     "timestamp": "garbage"},
]


def test_filter_by_status():
    assert [m["id"] for m in filter_messages_by_status(MESSAGES, "pending")] == ["1", "3"]
    assert filter_messages_by_status(None, "pending") == []


def test_pending_requests_and_unread_count():
    assert [m["id"] for m in get_pending_requests(MESSAGES, "me")] == ["1", "3"]
    assert get_pending_requests(MESSAGES, "bob") == []
    assert get_pending_requests(MESSAGES, "") == []
    assert count_unread_messages(MESSAGES, "me") == 2
    assert count_unread_messages("not a list", "me") == 0


def test_sort_newest_first_without_mutating():
    ordered = sort_messages_by_timestamp(MESSAGES)
    assert [m["id"] for m in ordered] == ["2", "1", "3", "4"]
    assert [m["id"] for m in MESSAGES] == ["1", "2", "3", "4"]


def test_group_by_other_party_in_first_seen_order():
    groups = group_messages_by_conversation(MESSAGES, "me")
    assert list(groups) == ["bob", "cy"]
    assert [m["id"] for m in groups["bob"]] == ["1", "2"]
    assert [m["id"] for m in groups["cy"]] == ["3", "4"]
    assert group_messages_by_conversation(MESSAGES, "") == {}


def test_non_mapping_elements_are_skipped():
    mixed = [None, "stray", 7, *MESSAGES]
    assert [m["id"] for m in filter_messages_by_status(mixed, "pending")] == ["1", "3"]
    assert count_unread_messages(mixed, "me") == 2
    assert [m["id"] for m in sort_messages_by_timestamp(mixed)] == ["2", "1", "3", "4"]
    assert list(group_messages_by_conversation(mixed, "me")) == ["bob", "cy"]

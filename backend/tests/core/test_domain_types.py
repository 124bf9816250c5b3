"""Domain Types — identity wrappers and enum members used across the API."""

from campuspool.core.domain_types import (
    ConversationId, ConversationStatus, MessageStatus, RequestType, SendPhase, UserId,
)


def test_identity_types_wrap_str():
    assert UserId("u1") == "u1"
    assert ConversationId("a__b") == "a__b"


def test_request_type_values():
    assert {t.value for t in RequestType} == {"request", "offer"}


def test_conversation_status_has_three_states():
    assert [s.value for s in ConversationStatus] == ["pending", "accepted", "denied"]


def test_message_status_adds_read():
    assert {s.value for s in MessageStatus} == {"pending", "accepted", "denied", "read"}


def test_send_phases():
    assert [p.value for p in SendPhase] == ["composing", "optimistic", "confirmed", "failed"]


def test_str_enums_compare_to_wire_values():
    assert ConversationStatus.PENDING == "pending"
    assert RequestType("offer") is RequestType.OFFER

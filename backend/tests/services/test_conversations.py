"""Conversations — keyed creation on first message, participant checks and the accept/deny gate."""

import pytest

from campuspool.core.conversation_keys import conversation_key
from campuspool.core.errors import (
    ConflictError, InvalidInputError, PermissionDeniedError, ResourceNotFoundError,
)
from campuspool.services import conversations


async def _open(db, sender, other, content="hi"):
    key = conversation_key(sender.id, other.id)
    await conversations.post_message(db, key, sender.id, content, other.id)
    return key


# --- Creation -----------------------------------------------------------------

async def test_first_message_creates_pending_conversation(test_db, seed_users):
    ada, ben = seed_users["ada"], seed_users["ben"]
    key = await _open(test_db, ada, ben)

    conversation = await conversations.get_conversation_for(test_db, key, ben.id)

    assert conversation.status == "pending"
    assert conversation.participants == [ada.id, ben.id]


async def test_creation_requires_other_user(test_db, seed_users):
    ada, ben = seed_users["ada"], seed_users["ben"]
    key = conversation_key(ada.id, ben.id)
    with pytest.raises(InvalidInputError):
        await conversations.post_message(test_db, key, ada.id, "hi")


async def test_self_messaging_rejected(test_db, seed_users):
    ada = seed_users["ada"]
    with pytest.raises(InvalidInputError):
        await conversations.post_message(
            test_db, conversation_key(ada.id, ada.id), ada.id, "hi", ada.id,
        )


async def test_key_must_match_participants(test_db, seed_users):
    ada, ben, cy = seed_users["ada"], seed_users["ben"], seed_users["cy"]
    with pytest.raises(InvalidInputError):
        await conversations.post_message(
            test_db, conversation_key(ada.id, cy.id), ada.id, "hi", ben.id,
        )


async def test_unknown_peer_is_not_found(test_db, seed_users):
    ada = seed_users["ada"]
    with pytest.raises(ResourceNotFoundError):
        await conversations.post_message(
            test_db, conversation_key(ada.id, "nobody"), ada.id, "hi", "nobody",
        )


# --- Participants -------------------------------------------------------------

async def test_outsiders_cannot_read_or_post(test_db, seed_users):
    ada, ben, cy = seed_users["ada"], seed_users["ben"], seed_users["cy"]
    key = await _open(test_db, ada, ben)

    with pytest.raises(PermissionDeniedError):
        await conversations.list_messages(test_db, key, cy.id)
    with pytest.raises(PermissionDeniedError):
        await conversations.post_message(test_db, key, cy.id, "let me in", ada.id)


async def test_messages_oldest_first(test_db, seed_users):
    ada, ben = seed_users["ada"], seed_users["ben"]
    key = await _open(test_db, ada, ben, "one")
    await conversations.post_message(test_db, key, ben.id, "two")
    await conversations.post_message(test_db, key, ada.id, "three")

    messages = await conversations.list_messages(test_db, key, ada.id)

    assert [m.content for m in messages] == ["one", "two", "three"]


# --- Accept / deny ------------------------------------------------------------

async def test_accept_then_deny_is_conflict(test_db, seed_users):
    ada, ben = seed_users["ada"], seed_users["ben"]
    key = await _open(test_db, ada, ben)

    accepted = await conversations.set_status(test_db, key, ben.id, "accepted")
    again = await conversations.set_status(test_db, key, ben.id, "accepted")

    assert accepted.status == again.status == "accepted"
    with pytest.raises(ConflictError):
        await conversations.set_status(test_db, key, ben.id, "denied")


async def test_denied_conversation_rejects_messages(test_db, seed_users):
    ada, ben = seed_users["ada"], seed_users["ben"]
    key = await _open(test_db, ada, ben)
    await conversations.set_status(test_db, key, ben.id, "denied")

    with pytest.raises(ConflictError):
        await conversations.post_message(test_db, key, ada.id, "please?")


# --- Listing ------------------------------------------------------------------

async def test_listing_newest_activity_first_and_hides_denied(test_db, seed_users):
    ada, ben, cy = seed_users["ada"], seed_users["ben"], seed_users["cy"]
    with_ben = await _open(test_db, ben, ada, "from ben")
    with_cy = await _open(test_db, cy, ada, "from cy")

    listing = await conversations.list_conversations(test_db, ada.id)
    assert [c.id for c in listing] == [with_cy, with_ben]
    assert listing[0].other_user.name == "Cy"
    assert listing[0].last_message.content == "from cy"

    await conversations.set_status(test_db, with_cy, ada.id, "denied")

    visible = await conversations.list_conversations(test_db, ada.id)
    everything = await conversations.list_conversations(test_db, ada.id, include_denied=True)
    assert [c.id for c in visible] == [with_ben]
    assert {c.id for c in everything} == {with_ben, with_cy}


async def test_other_user_prefers_profile_name(test_db, seed_users):
    ada, ben = seed_users["ada"], seed_users["ben"]
    await _open(test_db, ben, ada)

    [entry] = await conversations.list_conversations(test_db, ben.id)

    assert entry.other_user.id == ada.id
    assert entry.other_user.name == "Ada Profile"
    assert entry.last_activity == "just now"

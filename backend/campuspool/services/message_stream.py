"""Message Stream — optimistic sending for one conversation thread.

Invariants:
    - send() appends the optimistic record and clears the draft before any IO
    - Success: optimistic record replaced in place, then the thread is refreshed
    - Failure: optimistic record removed, draft restored exactly, error logged and
      swallowed (SendPhase.FAILED returned, nothing raised)
    - A failed refresh after a confirmed send keeps the confirmed list
    - Poll snapshots never drop an optimistic record that is still in flight

Design Decisions:
    - Broad except on the send path: the sender is an injected collaborator and
      any failure must roll back only the in-flight item
    - State lives on the instance (messages, draft, in-flight ids); list updates
      go through core.merge_message_stream so each step is a pure replacement
"""

import logging
from dataclasses import dataclass

from campuspool.core.domain_types import SendPhase
from campuspool.core.merge_message_stream import (
    ThreadMessage,
    append_optimistic,
    confirm_message,
    discard_message,
    make_optimistic_message,
    merge_server_messages,
)
from campuspool.core.repository_protocols import MessageSender
from campuspool.core.validate_message import is_valid_message_content, sanitize_message_content

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendOutcome:
    """Result of one send attempt."""
    phase: SendPhase
    temp_id: str | None = None
    message: ThreadMessage | None = None


class MessageThread:
    """Displayed message list plus compose draft for one conversation."""

    def __init__(
        self,
        sender: MessageSender,
        conversation_id: str,
        sender_id: str,
        other_user_id: str | None = None,
        messages: list[ThreadMessage] | None = None,
    ):
        self._sender = sender
        self.conversation_id = conversation_id
        self.sender_id = sender_id
        self.other_user_id = other_user_id
        self.messages: list[ThreadMessage] = list(messages or [])
        self.draft: str = ""
        self._in_flight: set[str] = set()

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    async def send(self) -> SendOutcome:
        """Send the current draft optimistically."""
        original_draft = self.draft
        if not is_valid_message_content(original_draft):
            return SendOutcome(phase=SendPhase.COMPOSING)

        content = sanitize_message_content(original_draft)
        optimistic = make_optimistic_message(
            self.conversation_id, self.sender_id, content,
        )
        self.messages = append_optimistic(self.messages, optimistic)
        self._in_flight.add(optimistic.id)
        self.draft = ""

        try:
            confirmed = await self._sender.send_message(
                self.conversation_id, content, self.other_user_id,
            )
        except Exception as e:
            self._in_flight.discard(optimistic.id)
            self.messages = discard_message(self.messages, optimistic.id)
            self.draft = original_draft
            logger.error(
                f"Failed to send message: {e}",
                extra={"conversation_id": self.conversation_id, "phase": SendPhase.FAILED.value},
            )
            return SendOutcome(phase=SendPhase.FAILED, temp_id=optimistic.id)

        self._in_flight.discard(optimistic.id)
        self.messages = confirm_message(self.messages, optimistic.id, confirmed)
        await self.refresh()
        return SendOutcome(
            phase=SendPhase.CONFIRMED, temp_id=optimistic.id, message=confirmed,
        )

    async def refresh(self) -> None:
        """Pull the authoritative thread; keep the current list if the fetch fails."""
        try:
            server_messages = await self._sender.get_messages(self.conversation_id)
        except Exception as e:
            logger.warning(
                f"Thread refresh failed, keeping local list: {e}",
                extra={"conversation_id": self.conversation_id},
            )
            return
        self.apply_server_snapshot(server_messages)

    def apply_server_snapshot(self, server_messages: list[ThreadMessage]) -> None:
        """Merge a poll result, keeping in-flight optimistic records."""
        self.messages = merge_server_messages(
            self.messages, server_messages, self.in_flight,
        )

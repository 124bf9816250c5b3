"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so the httpx client and test fakes
      satisfy the contract without inheriting from it
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that consume their results are never async themselves
"""

from typing import Protocol

from campuspool.core.merge_message_stream import ThreadMessage


class MessageSender(Protocol):
    """Contract used by MessageThread for one conversation's round trips."""
    async def send_message(
        self, conversation_id: str, content: str, other_user_id: str | None = None,
    ) -> ThreadMessage: ...
    async def get_messages(self, conversation_id: str) -> list[ThreadMessage]: ...


class FeedSource(Protocol):
    """Contract for polling subscriptions — each method fetches one snapshot."""
    async def get_conversations(self) -> list[dict]: ...
    async def get_messages(self, conversation_id: str) -> list[ThreadMessage]: ...
    async def get_requests(self) -> list[dict]: ...

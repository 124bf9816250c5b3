"""Realtime Subscription — cancellable polling loop standing in for push updates.

Invariants:
    - start() runs the callback immediately, then every interval_seconds
    - start() on a running subscription is a no-op
    - After stop() returns, no delivery callback runs (task cancelled + guard flag)
    - A failing fetch is logged and the loop keeps polling

Design Decisions:
    - Subscription object over a raw timer: consumers depend on start/stop only, so
      a push transport can replace polling without touching them
    - Fetch and deliver are split so an in-flight fetch finishing after stop()
      cannot reach the consumer
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from campuspool.core.repository_protocols import FeedSource

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0


class PollingSubscription:
    """Polls fetch() and hands each snapshot to deliver() until stopped."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        deliver: Callable[[Any], None],
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        name: str = "poll",
    ):
        self._fetch = fetch
        self._deliver = deliver
        self.interval_seconds = interval_seconds
        self.name = name
        self._task: asyncio.Task | None = None
        self._active = False

    @property
    def running(self) -> bool:
        return self._active

    def start(self) -> None:
        """Begin polling on the running event loop."""
        if self._active:
            return
        self._active = True
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"subscription:{self.name}",
        )

    def stop(self) -> None:
        self._active = False
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def tick(self) -> None:
        """One fetch/deliver cycle."""
        try:
            snapshot = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Polling fetch failed for {self.name}: {e}")
            return
        if self._active:
            self._deliver(snapshot)

    async def _run(self) -> None:
        while self._active:
            await self.tick()
            await asyncio.sleep(self.interval_seconds)


def subscribe_to_conversations(
    source: FeedSource, deliver: Callable[[list[dict]], None],
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> PollingSubscription:
    return PollingSubscription(
        source.get_conversations, deliver, interval_seconds, name="conversations",
    )


def subscribe_to_messages(
    source: FeedSource, conversation_id: str, deliver: Callable[[list], None],
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> PollingSubscription:
    async def fetch():
        return await source.get_messages(conversation_id)

    return PollingSubscription(
        fetch, deliver, interval_seconds, name=f"messages:{conversation_id}",
    )


def subscribe_to_carpool_requests(
    source: FeedSource, deliver: Callable[[list[dict]], None],
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> PollingSubscription:
    return PollingSubscription(
        source.get_requests, deliver, interval_seconds, name="carpool-requests",
    )

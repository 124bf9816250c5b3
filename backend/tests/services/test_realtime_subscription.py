"""Polling Subscription — immediate first tick, repeat, stop guarantee and error tolerance.

Invariants:
    - start() delivers once immediately, then every interval
    - Nothing is delivered after stop()
    - A failing fetch is logged and polling continues
"""

import asyncio
import logging

from campuspool.services.realtime_subscription import (
    PollingSubscription,
    subscribe_to_carpool_requests,
    subscribe_to_conversations,
    subscribe_to_messages,
)
from tests.services.fakes import FakeFeed


def _counter():
    state = {"n": 0}

    async def fetch():
        state["n"] += 1
        return state["n"]

    return fetch


async def test_start_delivers_immediately_then_repeats():
    delivered = []
    sub = PollingSubscription(_counter(), delivered.append, interval_seconds=0.01)

    sub.start()
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert delivered[:1] == [1]

    await asyncio.sleep(0.1)
    sub.stop()
    assert len(delivered) >= 2
    assert delivered == sorted(delivered)


async def test_no_delivery_after_stop():
    delivered = []
    sub = PollingSubscription(_counter(), delivered.append, interval_seconds=0.01)
    sub.start()
    await asyncio.sleep(0.05)

    sub.stop()
    count = len(delivered)
    await asyncio.sleep(0.05)

    assert len(delivered) == count
    assert not sub.running


async def test_inactive_subscription_drops_snapshot():
    delivered = []
    sub = PollingSubscription(_counter(), delivered.append)
    await sub.tick()
    assert delivered == []


async def test_fetch_stops_mid_flight_is_not_delivered():
    delivered = []
    release = asyncio.Event()

    async def slow_fetch():
        await release.wait()
        return "late"

    sub = PollingSubscription(slow_fetch, delivered.append, interval_seconds=0.01)
    sub.start()
    await asyncio.sleep(0.01)
    sub.stop()
    release.set()
    await asyncio.sleep(0.02)

    assert delivered == []


async def test_start_twice_is_noop():
    sub = PollingSubscription(_counter(), lambda _: None, interval_seconds=1)
    sub.start()
    task = sub._task
    sub.start()
    assert sub._task is task
    sub.stop()


async def test_fetch_errors_are_logged_and_polling_continues(caplog):
    delivered = []
    calls = {"n": 0}

    async def flaky():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("boom")
        return calls["n"]

    sub = PollingSubscription(flaky, delivered.append, interval_seconds=0.01, name="flaky")
    with caplog.at_level(logging.ERROR):
        sub.start()
        await asyncio.sleep(0.1)
        sub.stop()

    assert delivered and delivered[0] == 2
    assert "Polling fetch failed for flaky" in caplog.text


async def test_subscribe_helpers_poll_the_right_source():
    feed = FakeFeed()
    got = {}
    subs = [
        subscribe_to_conversations(feed, lambda s: got.setdefault("conversations", s), 0.01),
        subscribe_to_messages(feed, "a__b", lambda s: got.setdefault("messages", s), 0.01),
        subscribe_to_carpool_requests(feed, lambda s: got.setdefault("requests", s), 0.01),
    ]
    for sub in subs:
        sub.start()
    await asyncio.sleep(0.05)
    for sub in subs:
        sub.stop()

    assert got["conversations"] == [{"id": "a__b"}]
    assert got["messages"][0].conversation_id == "a__b"
    assert got["requests"] == [{"id": "r1"}]
    assert subs[1].name == "messages:a__b"

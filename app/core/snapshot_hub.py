"""
In-process fan-out of "something changed" signals for realtime snapshots.

Writers call publish(topic) after a successful commit, from any thread.
Subscribers wait on the event loop and reload the full snapshot when woken;
wake-ups coalesce, so a slow subscriber only ever sees the latest state.
"""

from __future__ import annotations

import asyncio
import threading
from typing import AsyncIterator, Awaitable, Callable, Dict, Optional, Set, TypeVar

from app.infra.logging_config import get_logger

logger = get_logger("snapshot_hub")

T = TypeVar("T")


def conversation_topic(conversation_id: object) -> str:
    return f"conversation:{conversation_id}"


def user_conversations_topic(uid: str) -> str:
    return f"user:{uid}:conversations"


def user_requests_topic(uid: str) -> str:
    return f"user:{uid}:requests"


class Subscription:
    """One listener on one topic. Close it to release the listener."""

    def __init__(self, hub: "SnapshotHub", topic: str) -> None:
        self.topic = topic
        self._hub = hub
        self._loop = asyncio.get_running_loop()
        self._event = asyncio.Event()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def notify(self) -> None:
        if self._closed:
            return
        try:
            self._loop.call_soon_threadsafe(self._event.set)
        except RuntimeError:
            # Loop already closed; nothing left to wake.
            self._closed = True

    async def wait(self) -> None:
        await self._event.wait()
        self._event.clear()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._hub._remove(self)


class SnapshotHub:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: Dict[str, Set[Subscription]] = {}

    def subscribe(self, topic: str) -> Subscription:
        """Register a listener; must be called from a running event loop."""
        sub = Subscription(self, topic)
        with self._lock:
            self._subscribers.setdefault(topic, set()).add(sub)
        return sub

    def publish(self, *topics: str) -> None:
        for topic in topics:
            with self._lock:
                subs = list(self._subscribers.get(topic, ()))
            for sub in subs:
                sub.notify()

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscribers.get(topic, ()))

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subscribers.get(sub.topic)
            if subs is None:
                return
            subs.discard(sub)
            if not subs:
                del self._subscribers[sub.topic]

    async def stream(
        self,
        topic: str,
        load: Callable[[], Awaitable[T]],
        subscription: Optional[Subscription] = None,
    ) -> AsyncIterator[T]:
        """
        Yield load() now and again after every publish on topic, forever.

        The listener is registered before the first load so no change between
        the initial read and the first wait is missed. Closing the generator
        (or cancelling the consumer) releases the listener.
        """
        sub = subscription or self.subscribe(topic)
        try:
            while True:
                yield await load()
                await sub.wait()
        finally:
            sub.close()
            logger.debug("Snapshot stream closed for %s", topic)

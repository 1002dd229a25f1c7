"""In-process publish/subscribe event bus.

Every subscriber owns its own unbounded queue, so delivery order is preserved
per subscriber. Events are not stored: a subscriber only sees events published
while it is registered.

Usage:
    bus = EventBus()

    async with bus.subscription(Topic.BOOK_ADDED) as events:
        async for book in events:
            ...

    bus.publish(Topic.BOOK_ADDED, book)
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any

from common.logger import get_logger

logger = get_logger(__name__)


class Topic(str, Enum):
    """Event topics."""

    BOOK_ADDED = "BOOK_ADDED"


class Subscriber:
    """A single registration on a topic; iterate it to receive payloads."""

    def __init__(self, topic: Topic):
        self.topic = topic
        self._queue: asyncio.Queue = asyncio.Queue()

    def deliver(self, payload: Any) -> None:
        self._queue.put_nowait(payload)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def __aiter__(self) -> "Subscriber":
        return self

    async def __anext__(self) -> Any:
        return await self._queue.get()


class EventBus:
    """Fan-out of published payloads to the subscribers of a topic."""

    def __init__(self):
        self._subscribers: dict[Topic, list[Subscriber]] = defaultdict(list)

    def subscribe(self, topic: Topic) -> Subscriber:
        subscriber = Subscriber(topic)
        self._subscribers[topic].append(subscriber)
        logger.debug(f"Subscribed to {topic.value} ({len(self._subscribers[topic])} active)")
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> None:
        subscribers = self._subscribers[subscriber.topic]
        if subscriber in subscribers:
            subscribers.remove(subscriber)
            logger.debug(f"Unsubscribed from {subscriber.topic.value} ({len(subscribers)} active)")

    def subscriber_count(self, topic: Topic) -> int:
        return len(self._subscribers[topic])

    def publish(self, topic: Topic, payload: Any) -> int:
        """Deliver a payload to every current subscriber of the topic.

        Args:
            topic: Topic to publish on
            payload: Value handed to each subscriber

        Returns:
            Number of subscribers the payload was delivered to
        """
        subscribers = list(self._subscribers[topic])
        for subscriber in subscribers:
            subscriber.deliver(payload)
        return len(subscribers)

    @asynccontextmanager
    async def subscription(self, topic: Topic) -> AsyncIterator[Subscriber]:
        """Subscribe for the duration of the block, unsubscribing on exit."""
        subscriber = self.subscribe(topic)
        try:
            yield subscriber
        finally:
            self.unsubscribe(subscriber)

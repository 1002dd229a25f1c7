"""Tests for the in-process event bus."""

import asyncio

from api.events import EventBus, Topic
from api.resolvers.subscriptions import stream_added_books


class TestEventBus:
    """Tests for subscribe, unsubscribe and publish."""

    def test_publish_without_subscribers(self):
        """Test publishing with no subscribers delivers nothing."""
        bus = EventBus()
        assert bus.publish(Topic.BOOK_ADDED, "lost") == 0

    async def test_each_subscriber_receives_in_order(self):
        """Test every subscriber receives every payload, in publish order."""
        bus = EventBus()
        first = bus.subscribe(Topic.BOOK_ADDED)
        second = bus.subscribe(Topic.BOOK_ADDED)

        for payload in ["a", "b", "c"]:
            assert bus.publish(Topic.BOOK_ADDED, payload) == 2

        for subscriber in (first, second):
            assert [await anext(subscriber) for _ in range(3)] == ["a", "b", "c"]

    async def test_late_subscriber_misses_earlier_events(self):
        """Test there is no replay of past events."""
        bus = EventBus()
        bus.publish(Topic.BOOK_ADDED, "early")
        subscriber = bus.subscribe(Topic.BOOK_ADDED)
        bus.publish(Topic.BOOK_ADDED, "late")
        assert subscriber.pending == 1
        assert await anext(subscriber) == "late"

    def test_unsubscribe_stops_delivery(self):
        """Test an unsubscribed subscriber receives nothing further."""
        bus = EventBus()
        subscriber = bus.subscribe(Topic.BOOK_ADDED)
        bus.unsubscribe(subscriber)
        bus.unsubscribe(subscriber)
        assert bus.publish(Topic.BOOK_ADDED, "x") == 0
        assert subscriber.pending == 0

    async def test_subscription_context_unsubscribes(self):
        """Test the context manager removes the subscriber on exit."""
        bus = EventBus()
        async with bus.subscription(Topic.BOOK_ADDED):
            assert bus.subscriber_count(Topic.BOOK_ADDED) == 1
        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0


class TestStreamAddedBooks:
    """Tests for the bookAdded stream."""

    async def test_stream_yields_published_books(self):
        """Test the stream yields books published after it starts."""
        bus = EventBus()
        stream = stream_added_books(bus)
        pending = asyncio.ensure_future(anext(stream))
        await asyncio.sleep(0)

        assert bus.publish(Topic.BOOK_ADDED, "book") == 1
        assert await asyncio.wait_for(pending, timeout=1) == "book"

        await stream.aclose()
        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0

    async def test_stream_not_subscribed_until_started(self):
        """Test an unstarted stream is not registered."""
        bus = EventBus()
        stream = stream_added_books(bus)
        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0
        await stream.aclose()

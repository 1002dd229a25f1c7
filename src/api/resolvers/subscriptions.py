"""Catalog subscription resolvers."""

from collections.abc import AsyncGenerator
from contextlib import aclosing

import strawberry
from strawberry.types import Info

from api.events import EventBus, Topic
from api.types import Book


async def stream_added_books(bus: EventBus) -> AsyncGenerator[Book, None]:
    """Yield each book published on BOOK_ADDED until the generator is closed."""
    async with bus.subscription(Topic.BOOK_ADDED) as books:
        async for book in books:
            yield book


@strawberry.type
class Subscription:
    """GraphQL subscriptions for the book catalog."""

    @strawberry.subscription
    async def book_added(self, info: Info) -> AsyncGenerator[Book, None]:
        async with aclosing(stream_added_books(info.context.bus)) as books:
            async for book in books:
                yield book

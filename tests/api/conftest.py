"""Shared fixtures for GraphQL resolver tests."""

import pytest

from api.auth import AuthConfig, create_token
from api.context import CatalogContext
from api.events import EventBus
from api.schema import schema
from common.constants import USERS
from store import MemoryStore


@pytest.fixture
async def store():
    """Create a connected in-memory store."""
    async with MemoryStore() as memory_store:
        yield memory_store


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def auth_config():
    return AuthConfig(secret="test-secret")


@pytest.fixture
async def user(store):
    """Create a stored user."""
    return await store.insert_one(USERS, {"username": "reader", "favorite_genre": "scifi"})


@pytest.fixture
def execute(store, bus, auth_config):
    """Execute a GraphQL operation, optionally with a bearer token for a user."""

    async def _execute(query, variables=None, user=None, authorization=None):
        if user is not None:
            authorization = f"Bearer {create_token(user, auth_config)}"
        context = CatalogContext(store=store, bus=bus, auth=auth_config, authorization=authorization)
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute


@pytest.fixture
def add_book(execute, user):
    """Add a book as the stored user."""

    async def _add_book(title, author, published=2000, genres=None):
        result = await execute(
            """
            mutation ($title: String!, $author: String!, $published: Int!, $genres: [String!]!) {
                addBook(title: $title, author: $author, published: $published, genres: $genres) {
                    id
                    title
                }
            }
            """,
            {"title": title, "author": author, "published": published, "genres": genres or []},
            user=user,
        )
        assert result.errors is None
        return result.data["addBook"]

    return _add_book

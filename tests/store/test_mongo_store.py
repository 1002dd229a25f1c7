"""Tests for the MongoDB adapter.

Translation and connection tests do not need a running MongoDB server;
the integration tests run only when MONGODB_URI is set.
"""

import os
import uuid

import pytest
from bson import ObjectId

from common.constants import AUTHORS, BOOKS, USERS
from store import DatabaseError, IntegrityError
from store.mongo_store import MongoStore, _to_filter, _to_row

MONGODB_URI = os.getenv("MONGODB_URI")


class TestDocumentTranslation:
    """Tests for mapping between store rows and MongoDB documents."""

    def test_to_row_exposes_string_id(self):
        """Test _id becomes a string id."""
        oid = ObjectId()
        row = _to_row({"_id": oid, "name": "Frank Herbert"})
        assert row == {"id": str(oid), "name": "Frank Herbert"}

    def test_to_filter_converts_id(self):
        """Test an id filter becomes an ObjectId _id filter."""
        oid = ObjectId()
        assert _to_filter({"id": str(oid), "name": "X"}) == {"_id": oid, "name": "X"}

    def test_to_filter_invalid_id(self):
        """Test an id that cannot be an ObjectId matches nothing."""
        assert _to_filter({"id": "not-an-object-id"}) is None

    def test_to_filter_empty(self):
        """Test empty queries match everything."""
        assert _to_filter(None) == {}
        assert _to_filter({}) == {}


class TestMongoStore:
    """Tests for MongoStore without a server."""

    def test_create_adapter(self):
        """Test creating an adapter does not connect."""
        store = MongoStore("mongodb://localhost:27017", database="catalog")
        assert store.database == "catalog"
        assert store._client is None

    async def test_queries_require_connection(self):
        """Test operations fail before connect."""
        store = MongoStore("mongodb://localhost:27017")
        with pytest.raises(DatabaseError, match="No active connection"):
            await store.count("books")

    async def test_invalid_id_short_circuits(self):
        """Test lookups by impossible ids return without touching the server."""
        store = MongoStore("mongodb://localhost:27017")
        assert await store.find_one("users", {"id": "bogus"}) is None
        assert await store.find("users", {"id": "bogus"}) == []
        assert await store.count("users", {"id": "bogus"}) == 0


@pytest.mark.skipif(not MONGODB_URI, reason="MongoDB integration tests need MONGODB_URI")
class TestMongoStoreIntegration:
    """Tests for MongoStore against a running MongoDB server.

    Each test works in its own throwaway database, dropped afterwards.

    To run these tests:
    1. Start MongoDB: docker run -p 27017:27017 mongo
    2. Set environment: export MONGODB_URI=mongodb://localhost:27017
    3. Run tests: pytest tests/store
    """

    @pytest.fixture
    async def mongo_store(self):
        """Create a connected store with unique indexes in a fresh database."""
        store = MongoStore(MONGODB_URI)
        await store.connect()
        database = f"catalog_test_{uuid.uuid4().hex[:12]}"
        store._db = store._client[database]
        await store.ensure_indexes()
        yield store
        await store._client.drop_database(database)
        await store.close()

    async def test_insert_and_find(self, mongo_store):
        """Test inserted documents come back with a string id."""
        row = await mongo_store.insert_one(AUTHORS, {"name": "Ursula K. Le Guin", "born": 1929})

        assert ObjectId.is_valid(row["id"])
        assert await mongo_store.find_one(AUTHORS, {"id": row["id"]}) == row
        assert await mongo_store.find_one(AUTHORS, {"name": "Ursula K. Le Guin"}) == row
        assert await mongo_store.find(AUTHORS) == [row]
        assert await mongo_store.count(AUTHORS) == 1

    async def test_list_field_matches_member(self, mongo_store):
        """Test a scalar filter matches documents whose list contains it."""
        await mongo_store.insert_one(BOOKS, {"title": "Dune", "genres": ["scifi", "classic"]})
        await mongo_store.insert_one(BOOKS, {"title": "Emma", "genres": ["classic"]})

        rows = await mongo_store.find(BOOKS, {"genres": "scifi"})
        assert [row["title"] for row in rows] == ["Dune"]
        assert await mongo_store.count(BOOKS, {"genres": "classic"}) == 2

    @pytest.mark.parametrize(
        "collection,document",
        [
            (BOOKS, {"title": "Dune"}),
            (AUTHORS, {"name": "Frank Herbert"}),
            (USERS, {"username": "reader"}),
        ],
    )
    async def test_duplicate_insert_raises_integrity_error(self, mongo_store, collection, document):
        """Test unique indexes turn duplicate inserts into IntegrityError."""
        await mongo_store.insert_one(collection, document)
        with pytest.raises(IntegrityError):
            await mongo_store.insert_one(collection, dict(document))
        assert await mongo_store.count(collection) == 1

    async def test_update_returns_updated_document(self, mongo_store):
        """Test update_one returns the document after the update."""
        row = await mongo_store.insert_one(AUTHORS, {"name": "Frank Herbert", "born": None})

        updated = await mongo_store.update_one(AUTHORS, {"name": "Frank Herbert"}, {"born": 1920})

        assert updated == {"id": row["id"], "name": "Frank Herbert", "born": 1920}

    async def test_update_missing_returns_none(self, mongo_store):
        """Test update_one returns None without a match."""
        assert await mongo_store.update_one(AUTHORS, {"name": "Nobody"}, {"born": 1900}) is None

    async def test_update_into_duplicate_raises_integrity_error(self, mongo_store):
        """Test an update colliding with a unique field raises IntegrityError."""
        await mongo_store.insert_one(AUTHORS, {"name": "A"})
        await mongo_store.insert_one(AUTHORS, {"name": "B"})
        with pytest.raises(IntegrityError):
            await mongo_store.update_one(AUTHORS, {"name": "B"}, {"name": "A"})

"""MongoDB document store implementation.

This adapter wraps pymongo's asyncio client to provide the DocumentStore
interface. The driver's "_id" ObjectId is exposed to callers as a string "id".
"""

from bson import ObjectId
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from common.constants import UNIQUE_FIELDS

from .interface import DocumentStore
from .types import ConnectionError as DBConnectionError
from .types import DatabaseError, Row
from .types import IntegrityError as DBIntegrityError


def _to_row(document: dict) -> Row:
    row = {key: value for key, value in document.items() if key != "_id"}
    row["id"] = str(document["_id"])
    return row


def _to_filter(query: Row | None) -> dict | None:
    """Translate a store query to a MongoDB filter.

    Returns None when the query addresses an id that cannot exist.
    """
    if not query:
        return {}
    mongo_filter = dict(query)
    if "id" in mongo_filter:
        doc_id = mongo_filter.pop("id")
        if not ObjectId.is_valid(doc_id):
            return None
        mongo_filter["_id"] = ObjectId(doc_id)
    return mongo_filter


class MongoStore(DocumentStore):
    """MongoDB document store adapter."""

    def __init__(self, uri: str, database: str = "library", timeout_ms: int = 5000):
        """Initialize MongoDB adapter.

        Args:
            uri: MongoDB connection string
            database: Database name used when the URI does not name one
            timeout_ms: Server selection timeout in milliseconds
        """
        self.uri = uri
        self.database = database
        self.timeout_ms = timeout_ms
        self._client: AsyncMongoClient | None = None
        self._db = None

    def _collection(self, name: str):
        if self._db is None:
            raise DatabaseError("No active connection")
        return self._db[name]

    async def connect(self) -> None:
        """Create the client and ping the server."""
        try:
            self._client = AsyncMongoClient(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
            self._db = self._client.get_default_database(default=self.database)
            await self._client.admin.command("ping")
        except PyMongoError as e:
            await self.close()
            raise DBConnectionError(f"Failed to connect to MongoDB: {e}") from e

    async def close(self) -> None:
        """Close the client."""
        if self._client is not None:
            await self._client.close()
        self._client = None
        self._db = None

    async def ensure_indexes(self) -> None:
        try:
            for collection, field in UNIQUE_FIELDS.items():
                await self._collection(collection).create_index(field, unique=True)
        except PyMongoError as e:
            raise DatabaseError(f"Failed to create indexes: {e}") from e

    async def insert_one(self, collection: str, document: Row) -> Row:
        stored = {key: value for key, value in document.items() if key != "id"}
        try:
            result = await self._collection(collection).insert_one(stored)
        except DuplicateKeyError as e:
            raise DBIntegrityError(f"Duplicate document in {collection}: {e}") from e
        except PyMongoError as e:
            raise DatabaseError(f"Failed to insert into {collection}: {e}") from e
        stored["_id"] = result.inserted_id
        return _to_row(stored)

    async def find_one(self, collection: str, query: Row) -> Row | None:
        mongo_filter = _to_filter(query)
        if mongo_filter is None:
            return None
        try:
            document = await self._collection(collection).find_one(mongo_filter)
        except PyMongoError as e:
            raise DatabaseError(f"Failed to query {collection}: {e}") from e
        return _to_row(document) if document else None

    async def find(self, collection: str, query: Row | None = None) -> list[Row]:
        mongo_filter = _to_filter(query)
        if mongo_filter is None:
            return []
        try:
            cursor = self._collection(collection).find(mongo_filter)
            documents = await cursor.to_list()
        except PyMongoError as e:
            raise DatabaseError(f"Failed to query {collection}: {e}") from e
        return [_to_row(document) for document in documents]

    async def count(self, collection: str, query: Row | None = None) -> int:
        mongo_filter = _to_filter(query)
        if mongo_filter is None:
            return 0
        try:
            return await self._collection(collection).count_documents(mongo_filter)
        except PyMongoError as e:
            raise DatabaseError(f"Failed to count {collection}: {e}") from e

    async def update_one(self, collection: str, query: Row, values: Row) -> Row | None:
        mongo_filter = _to_filter(query)
        if mongo_filter is None:
            return None
        try:
            document = await self._collection(collection).find_one_and_update(
                mongo_filter,
                {"$set": values},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise DBIntegrityError(f"Duplicate document in {collection}: {e}") from e
        except PyMongoError as e:
            raise DatabaseError(f"Failed to update {collection}: {e}") from e
        return _to_row(document) if document else None

"""In-memory document store implementation.

Keeps each collection as an ordered dict of documents inside the process.
Used for local development (DATABASE_TYPE=memory) and throughout the tests.
"""

import copy
import uuid

from common.constants import UNIQUE_FIELDS

from .interface import DocumentStore
from .types import DatabaseError, IntegrityError, Row


def _matches(document: Row, query: Row | None) -> bool:
    if not query:
        return True
    for key, expected in query.items():
        actual = document.get(key)
        if isinstance(actual, list) and not isinstance(expected, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


class MemoryStore(DocumentStore):
    """Document store backed by plain dictionaries.

    Documents are copied on the way in and out, so callers never share
    mutable state with the store.
    """

    def __init__(self, unique_fields: dict[str, str] | None = None):
        """Initialize the in-memory store.

        Args:
            unique_fields: Collection name to unique field name mapping,
                defaults to common.constants.UNIQUE_FIELDS
        """
        self.unique_fields = dict(UNIQUE_FIELDS if unique_fields is None else unique_fields)
        self._collections: dict[str, dict[str, Row]] = {}
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def _collection(self, name: str) -> dict[str, Row]:
        if not self._connected:
            raise DatabaseError("No active connection")
        return self._collections.setdefault(name, {})

    def _check_unique(self, collection: str, document: Row, exclude_id: str | None = None) -> None:
        field = self.unique_fields.get(collection)
        if field is None or field not in document:
            return
        for doc_id, existing in self._collection(collection).items():
            if doc_id != exclude_id and existing.get(field) == document[field]:
                raise IntegrityError(
                    f"Duplicate value for {collection}.{field}: {document[field]!r}"
                )

    async def connect(self) -> None:
        """Open the store; existing data survives a close/connect cycle."""
        self._connected = True

    async def close(self) -> None:
        """Close the store, retaining data for the next connect."""
        self._connected = False

    async def ensure_indexes(self) -> None:
        """Unique fields are checked on every write; nothing to build."""
        if not self._connected:
            raise DatabaseError("No active connection")

    async def insert_one(self, collection: str, document: Row) -> Row:
        stored = copy.deepcopy(document)
        stored.pop("id", None)
        self._check_unique(collection, stored)
        stored["id"] = uuid.uuid4().hex
        self._collection(collection)[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def find_one(self, collection: str, query: Row) -> Row | None:
        for document in self._collection(collection).values():
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def find(self, collection: str, query: Row | None = None) -> list[Row]:
        return [
            copy.deepcopy(document)
            for document in self._collection(collection).values()
            if _matches(document, query)
        ]

    async def count(self, collection: str, query: Row | None = None) -> int:
        return sum(1 for document in self._collection(collection).values() if _matches(document, query))

    async def update_one(self, collection: str, query: Row, values: Row) -> Row | None:
        documents = self._collection(collection)
        for doc_id, document in documents.items():
            if _matches(document, query):
                updated = {**document, **copy.deepcopy(values), "id": doc_id}
                self._check_unique(collection, updated, exclude_id=doc_id)
                documents[doc_id] = updated
                return copy.deepcopy(updated)
        return None

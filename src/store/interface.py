"""Abstract document store interface.

This module defines the interface that all store adapters must implement,
providing a consistent async API for document operations across MongoDB and
the in-memory store.

Queries are flat equality filters. A filter value matches a document field
when they are equal or, for list fields, when the list contains the value.
The key "id" addresses the system-assigned document identifier.
"""

from abc import ABC, abstractmethod

from .types import Row


class DocumentStore(ABC):
    """Abstract document store adapter."""

    @abstractmethod
    async def connect(self) -> None:
        """Establish the store connection and verify it responds.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the store connection."""
        pass

    @abstractmethod
    async def ensure_indexes(self) -> None:
        """Create the unique indexes declared in common.constants.UNIQUE_FIELDS.

        Raises:
            DatabaseError: If index creation fails
        """
        pass

    @abstractmethod
    async def insert_one(self, collection: str, document: Row) -> Row:
        """Insert a document and return it with its assigned "id".

        Args:
            collection: Collection name
            document: Document fields (without "id")

        Returns:
            The stored document including "id"

        Raises:
            IntegrityError: If a unique field collides with an existing document
            DatabaseError: If the insert fails
        """
        pass

    @abstractmethod
    async def find_one(self, collection: str, query: Row) -> Row | None:
        """Return the first document matching the query, or None."""
        pass

    @abstractmethod
    async def find(self, collection: str, query: Row | None = None) -> list[Row]:
        """Return all documents matching the query, in insertion order."""
        pass

    @abstractmethod
    async def count(self, collection: str, query: Row | None = None) -> int:
        """Count documents matching the query."""
        pass

    @abstractmethod
    async def update_one(self, collection: str, query: Row, values: Row) -> Row | None:
        """Set fields on the first matching document.

        Args:
            collection: Collection name
            query: Filter selecting the document
            values: Fields to set

        Returns:
            The updated document, or None when nothing matched

        Raises:
            IntegrityError: If the update violates a unique field
            DatabaseError: If the update fails
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
        return False

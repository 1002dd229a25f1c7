"""Document store abstraction layer for the book catalog.

This package provides a consistent async interface for document operations
across MongoDB and an in-memory backend.

Example:
    >>> from store import StoreConfig, create_store
    >>>
    >>> store = create_store(StoreConfig(store_type="memory"))
    >>> await store.connect()
    >>> author = await store.insert_one("authors", {"name": "Ursula K. Le Guin", "born": 1929})
    >>> await store.find_one("authors", {"id": author["id"]})
"""

from .factory import StoreConfig, create_store, get_store
from .interface import DocumentStore
from .memory_store import MemoryStore
from .types import (
    ConnectionError,
    DatabaseError,
    IntegrityError,
    Row,
    StoreType,
)

__all__ = [
    # Factory
    "StoreConfig",
    "create_store",
    "get_store",
    # Interface
    "DocumentStore",
    "MemoryStore",
    # Types and exceptions
    "StoreType",
    "DatabaseError",
    "ConnectionError",
    "IntegrityError",
    "Row",
]

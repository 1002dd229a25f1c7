"""Shared types and exceptions for the document store layer."""

from enum import Enum
from typing import Any


class StoreType(str, Enum):
    """Supported document store types."""

    MONGODB = "mongodb"
    MEMORY = "memory"


class DatabaseError(Exception):
    """Base exception for store operations."""

    pass


class ConnectionError(DatabaseError):
    """Error connecting to the store."""

    pass


class IntegrityError(DatabaseError):
    """Unique constraint violation."""

    pass


# Type alias for stored documents; every document carries a string "id"
Row = dict[str, Any]

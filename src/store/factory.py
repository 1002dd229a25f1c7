"""Store factory for creating document store adapters.

This module provides a factory function and configuration class for creating
store adapters based on the store type (MongoDB or in-memory).
"""

from dataclasses import dataclass

from .interface import DocumentStore
from .memory_store import MemoryStore
from .types import StoreType


@dataclass
class StoreConfig:
    """Document store configuration container.

    Attributes:
        store_type: Type of store ('mongodb' or 'memory')
        uri: MongoDB connection string (for MongoDB only)
        database: MongoDB database name when the URI names none (for MongoDB only)
    """

    store_type: StoreType | str
    uri: str | None = None
    database: str = "library"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.store_type, str):
            try:
                self.store_type = StoreType(self.store_type.lower())
            except ValueError as e:
                raise ValueError(
                    f"Unsupported store type: {self.store_type}. "
                    f"Must be one of: {', '.join(t.value for t in StoreType)}"
                ) from e

        if self.store_type == StoreType.MONGODB and not self.uri:
            raise ValueError("MONGODB_URI is required for MongoDB")


def create_store(config: StoreConfig) -> DocumentStore:
    """Factory function to create the appropriate store adapter.

    Args:
        config: Store configuration

    Returns:
        Store adapter instance (not yet connected)

    Example:
        >>> store = create_store(StoreConfig(store_type="memory"))
        >>> store = create_store(
        ...     StoreConfig(store_type="mongodb", uri="mongodb://localhost:27017/library")
        ... )
    """
    if config.store_type == StoreType.MEMORY:
        return MemoryStore()

    elif config.store_type == StoreType.MONGODB:
        # Import here so the memory store works without a MongoDB driver loaded
        from .mongo_store import MongoStore

        return MongoStore(uri=config.uri, database=config.database)

    else:
        raise ValueError(f"Unsupported store type: {config.store_type}")


def get_store() -> DocumentStore:
    """Get a store adapter using environment configuration.

    Returns:
        Configured store adapter

    Raises:
        ValueError: If DATABASE_TYPE is unknown or MONGODB_URI is missing
    """
    from common.env import env

    config = StoreConfig(
        store_type=env.database_type(),
        uri=env.mongodb_uri(),
        database=env.mongodb_database(),
    )
    return create_store(config)

"""Shared constants for the book catalog API.

For environment-based configuration (store settings, secrets), use the env module:
    from common.env import env
    store_type = env.database_type()
"""

# Document store collections
BOOKS = "books"
AUTHORS = "authors"
USERS = "users"

# Unique key of each collection, enforced by the store
UNIQUE_FIELDS: dict[str, str] = {
    BOOKS: "title",
    AUTHORS: "name",
    USERS: "username",
}

# Genre value meaning "do not filter by genre"
ALL_GENRES = "all genres"

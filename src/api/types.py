"""GraphQL type definitions for the book catalog API."""

import strawberry
from strawberry.types import Info

from common.constants import AUTHORS, BOOKS
from store import Row

from .errors import CatalogError


@strawberry.type
class Author:
    """Author entity; books reference their author by id."""

    id: strawberry.ID
    name: str
    born: int | None = None

    @strawberry.field
    async def book_count(self, info: Info) -> int:
        """Number of books referencing this author."""
        counts = info.context.book_counts
        if counts is not None and self.name in counts:
            return counts[self.name]
        return await info.context.store.count(BOOKS, {"author": self.id})


@strawberry.type
class Book:
    """Book entity with its genres and author."""

    id: strawberry.ID
    title: str
    published: int
    genres: list[str]
    author_id: strawberry.Private[str]
    loaded_author: strawberry.Private[Author | None] = None

    @strawberry.field
    async def author(self, info: Info) -> Author:
        if self.loaded_author is not None:
            return self.loaded_author
        row = await info.context.store.find_one(AUTHORS, {"id": self.author_id})
        if row is None:
            raise CatalogError(f"Author {self.author_id} of book {self.title!r} not found")
        self.loaded_author = author_from_row(row)
        return self.loaded_author


@strawberry.type
class User:
    """Registered user."""

    id: strawberry.ID
    username: str
    favorite_genre: str


@strawberry.type
class Token:
    """Signed bearer token returned by login."""

    value: str


def author_from_row(row: Row) -> Author:
    return Author(id=strawberry.ID(row["id"]), name=row["name"], born=row.get("born"))


def book_from_row(row: Row, author: Author | None = None) -> Book:
    return Book(
        id=strawberry.ID(row["id"]),
        title=row["title"],
        published=row["published"],
        genres=list(row.get("genres", [])),
        author_id=row["author"],
        loaded_author=author,
    )


def user_from_row(row: Row) -> User:
    return User(
        id=strawberry.ID(row["id"]),
        username=row["username"],
        favorite_genre=row["favorite_genre"],
    )

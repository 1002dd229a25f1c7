"""Catalog query resolvers."""

import strawberry
from strawberry.types import Info

from api.types import Author, Book, User, author_from_row, book_from_row, user_from_row
from common.constants import AUTHORS, BOOKS
from store import DocumentStore

from .filters import collect_genres, count_books_by_author, filter_books


async def load_books(store: DocumentStore, authors: list[Author] | None = None) -> list[Book]:
    """Load every book with its author attached.

    Args:
        store: Document store
        authors: Already loaded authors; read from the store when None
    """
    if authors is None:
        authors = [author_from_row(row) for row in await store.find(AUTHORS)]
    by_id = {author.id: author for author in authors}
    return [book_from_row(row, by_id.get(row["author"])) for row in await store.find(BOOKS)]


@strawberry.type
class Query:
    """GraphQL queries for the book catalog."""

    @strawberry.field
    async def book_count(self, info: Info) -> int:
        return await info.context.store.count(BOOKS)

    @strawberry.field
    async def author_count(self, info: Info) -> int:
        return await info.context.store.count(AUTHORS)

    @strawberry.field
    async def all_books(
        self,
        info: Info,
        author: str | None = None,
        genre: str | None = None,
    ) -> list[Book]:
        """
        List books, optionally filtered by author name and genre.

        Args:
            author: Exact author name
            genre: Genre to match, or "all genres" for no genre filter

        Returns:
            Matching books with authors resolved
        """
        books = await load_books(info.context.store)
        return filter_books(books, author=author, genre=genre)

    @strawberry.field
    async def all_authors(self, info: Info) -> list[Author]:
        """
        List all authors.

        Book counts for every author are computed here in one pass and left
        on the context for Author.bookCount.
        """
        store = info.context.store
        authors = [author_from_row(row) for row in await store.find(AUTHORS)]
        books = await load_books(store, authors)
        info.context.book_counts = count_books_by_author(books)
        return authors

    @strawberry.field
    async def all_genres(self, info: Info) -> list[str]:
        rows = await info.context.store.find(BOOKS)
        return collect_genres(row.get("genres", []) for row in rows)

    @strawberry.field
    async def me(self, info: Info) -> User | None:
        user = await info.context.get_current_user()
        return user_from_row(user) if user else None

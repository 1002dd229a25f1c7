"""Catalog mutation resolvers."""

import strawberry
from strawberry.types import Info

from api.auth import create_token
from api.errors import AuthenticationRequired, InvalidCredentials, UserInputError
from api.events import Topic
from api.types import Author, Book, Token, User, author_from_row, book_from_row, user_from_row
from common.constants import AUTHORS, BOOKS, USERS
from common.logger import get_logger
from store import DatabaseError, DocumentStore, Row

logger = get_logger(__name__)


async def find_or_create_author(store: DocumentStore, name: str) -> tuple[Row, bool]:
    """Look up an author by name, creating one without a birth year if absent.

    Returns:
        Tuple of (author document, whether it was created)

    Raises:
        DatabaseError: If the lookup or insert fails
    """
    author = await store.find_one(AUTHORS, {"name": name})
    if author is not None:
        return author, False
    author = await store.insert_one(AUTHORS, {"name": name, "born": None})
    logger.info(f"Created author [bold]{name}[/bold]")
    return author, True


async def require_user(info: Info) -> Row:
    user = await info.context.get_current_user()
    if user is None:
        raise AuthenticationRequired()
    return user


@strawberry.type
class Mutation:
    """GraphQL mutations for the book catalog."""

    @strawberry.mutation
    async def add_book(
        self,
        info: Info,
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> Book:
        """
        Add a book, creating its author on first use.

        Publishes the new book to bookAdded subscribers.

        Raises:
            AuthenticationRequired: Without a current user
            UserInputError: On a duplicate title or a failed write
        """
        store = info.context.store
        try:
            await require_user(info)
            existing = await store.find_one(BOOKS, {"title": title})
        except DatabaseError as e:
            logger.error(f"Book saving failed: {e}")
            raise UserInputError("Book saving failed", invalid_args=title, cause=e) from e

        if existing is not None:
            raise UserInputError("Book title must be unique", invalid_args=title)

        try:
            author_row, _ = await find_or_create_author(store, author)
        except DatabaseError as e:
            logger.error(f"Author saving failed: {e}")
            raise UserInputError("Author saving failed", invalid_args=author, cause=e) from e

        try:
            book_row = await store.insert_one(
                BOOKS,
                {
                    "title": title,
                    "published": published,
                    "genres": list(genres),
                    "author": author_row["id"],
                },
            )
        except DatabaseError as e:
            logger.error(f"Book saving failed: {e}")
            raise UserInputError("Book saving failed", invalid_args=title, cause=e) from e

        book = book_from_row(book_row, author_from_row(author_row))
        delivered = info.context.bus.publish(Topic.BOOK_ADDED, book)
        logger.info(f"Added book [bold]{title}[/bold] ({delivered} subscriber(s) notified)")
        return book

    @strawberry.mutation
    async def edit_author(self, info: Info, name: str, set_born_to: int) -> Author | None:
        """Set an author's birth year; returns None when no author has that name."""
        await require_user(info)
        try:
            row = await info.context.store.update_one(AUTHORS, {"name": name}, {"born": set_born_to})
        except DatabaseError as e:
            logger.error(f"Editing author failed: {e}")
            raise UserInputError("Editing the author failed", invalid_args=name, cause=e) from e
        return author_from_row(row) if row else None

    @strawberry.mutation
    async def create_user(self, info: Info, username: str, favorite_genre: str) -> User:
        try:
            row = await info.context.store.insert_one(
                USERS, {"username": username, "favorite_genre": favorite_genre}
            )
        except DatabaseError as e:
            logger.error(f"Creating user failed: {e}")
            raise UserInputError("Creating the user failed", invalid_args=username, cause=e) from e
        return user_from_row(row)

    @strawberry.mutation
    async def login(self, info: Info, username: str, password: str) -> Token:
        user = await info.context.store.find_one(USERS, {"username": username})
        if user is None or password != info.context.auth.login_password:
            raise InvalidCredentials()
        return Token(value=create_token(user, info.context.auth))

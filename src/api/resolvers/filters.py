"""Book filtering and aggregation used by the catalog queries."""

from collections import Counter
from collections.abc import Iterable

from api.types import Book
from common.constants import ALL_GENRES


def _author_name(book: Book) -> str | None:
    return book.loaded_author.name if book.loaded_author is not None else None


def _by_genre(books: list[Book], genre: str) -> list[Book]:
    if genre == ALL_GENRES:
        return books
    return [book for book in books if genre in book.genres]


def filter_books(books: list[Book], author: str | None = None, genre: str | None = None) -> list[Book]:
    """Filter books with loaded authors by author name and genre.

    When both filters are given and no book matches the author, the genre
    filter is applied to the full list instead of the empty author match.

    Args:
        books: Books with their authors loaded
        author: Exact author name, or None/empty for any author
        genre: Genre the book must list; ALL_GENRES or None/empty for any genre

    Returns:
        Matching books in their original order
    """
    if not (author or genre):
        return books

    filtered: list[Book] = []
    if author:
        filtered = [book for book in books if _author_name(book) == author]
    if genre:
        if not filtered:
            return _by_genre(books, genre)
        filtered = _by_genre(filtered, genre)
    return filtered


def collect_genres(genre_lists: Iterable[list[str]]) -> list[str]:
    """Distinct genres in first-seen order, followed by ALL_GENRES once."""
    genres = dict.fromkeys(
        genre for genres in genre_lists for genre in genres if genre != ALL_GENRES
    )
    return [*genres, ALL_GENRES]


def count_books_by_author(books: Iterable[Book]) -> dict[str, int]:
    """Map each author name to the number of books by that author."""
    return dict(Counter(name for name in map(_author_name, books) if name is not None))

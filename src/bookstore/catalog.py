"""The fixed catalog written by the seeder."""

from __future__ import annotations

from typing import Any

from .models import Book

BOOKS: tuple[Book, ...] = (
    Book(
        title="To Kill a Mockingbird",
        author="Harper Lee",
        genre="Fiction",
        published_year=1960,
        price=12.99,
        in_stock=True,
        pages=336,
        publisher="J. B. Lippincott & Co.",
    ),
    Book(
        title="1984",
        author="George Orwell",
        genre="Dystopian",
        published_year=1949,
        price=10.99,
        in_stock=True,
        pages=328,
        publisher="Secker & Warburg",
    ),
    Book(
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        genre="Fiction",
        published_year=1925,
        price=9.99,
        in_stock=True,
        pages=180,
        publisher="Charles Scribner's Sons",
    ),
    Book(
        title="Brave New World",
        author="Aldous Huxley",
        genre="Dystopian",
        published_year=1932,
        price=11.5,
        in_stock=False,
        pages=311,
        publisher="Chatto & Windus",
    ),
    Book(
        title="The Hobbit",
        author="J.R.R. Tolkien",
        genre="Fantasy",
        published_year=1937,
        price=14.99,
        in_stock=True,
        pages=310,
        publisher="George Allen & Unwin",
    ),
    Book(
        title="The Catcher in the Rye",
        author="J.D. Salinger",
        genre="Fiction",
        published_year=1951,
        price=8.99,
        in_stock=True,
        pages=224,
        publisher="Little, Brown and Company",
    ),
    Book(
        title="Pride and Prejudice",
        author="Jane Austen",
        genre="Romance",
        published_year=1813,
        price=7.99,
        in_stock=True,
        pages=432,
        publisher="T. Egerton, Whitehall",
    ),
    Book(
        title="The Lord of the Rings",
        author="J.R.R. Tolkien",
        genre="Fantasy",
        published_year=1954,
        price=19.99,
        in_stock=True,
        pages=1178,
        publisher="Allen & Unwin",
    ),
    Book(
        title="Animal Farm",
        author="George Orwell",
        genre="Political Satire",
        published_year=1945,
        price=8.5,
        in_stock=False,
        pages=112,
        publisher="Secker & Warburg",
    ),
    Book(
        title="The Alchemist",
        author="Paulo Coelho",
        genre="Fiction",
        published_year=1988,
        price=10.99,
        in_stock=True,
        pages=197,
        publisher="HarperOne",
    ),
    Book(
        title="Moby Dick",
        author="Herman Melville",
        genre="Adventure",
        published_year=1851,
        price=12.5,
        in_stock=False,
        pages=635,
        publisher="Harper & Brothers",
    ),
    Book(
        title="Wuthering Heights",
        author="Emily Brontë",
        genre="Gothic Fiction",
        published_year=1847,
        price=9.99,
        in_stock=True,
        pages=342,
        publisher="Thomas Cautley Newby",
    ),
)


def catalog_documents(books: tuple[Book, ...] | list[Book] = BOOKS) -> list[dict[str, Any]]:
    """Return new document dicts for ``books``.

    ``insert_many`` writes ``_id`` into the dicts it is given, so callers
    always get fresh copies.
    """
    return [book.to_dict() for book in books]


def books_by_title(books: tuple[Book, ...] | list[Book] = BOOKS) -> dict[str, Book]:
    """Index books by title."""
    return {book.title: book for book in books}

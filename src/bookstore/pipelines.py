"""Query filters, projections and aggregation pipelines for the book collection.

Everything here builds plain documents; nothing talks to the server, so the
shapes can be checked without a running MongoDB.
"""

from __future__ import annotations

from typing import Any

from pymongo import ASCENDING, DESCENDING

Document = dict[str, Any]
Pipeline = list[Document]

TITLE_INDEX_KEYS = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX_KEYS = [("author", ASCENDING), ("published_year", ASCENDING)]

# Projection for the in-stock listing
LISTING_PROJECTION: Document = {"title": 1, "author": 1, "price": 1, "_id": 0}


def genre_filter(genre: str) -> Document:
    return {"genre": genre}


def published_after_filter(year: int) -> Document:
    return {"published_year": {"$gt": year}}


def author_filter(author: str) -> Document:
    return {"author": author}


def title_filter(title: str) -> Document:
    return {"title": title}


def set_price_update(price: float) -> Document:
    return {"$set": {"price": price}}


def in_stock_published_after_filter(year: int) -> Document:
    """Books currently in stock and published after ``year``."""
    return {"in_stock": True, "published_year": {"$gt": year}}


def average_price_by_genre_pipeline() -> Pipeline:
    """One ``{_id: genre, avgPrice}`` row per distinct genre."""
    return [
        {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
        {"$sort": {"_id": 1}},
    ]


def top_author_pipeline(limit: int = 1) -> Pipeline:
    """Authors ranked by number of books, most prolific first."""
    return [
        {"$group": {"_id": "$author", "count": {"$sum": 1}}},
        {"$sort": {"count": DESCENDING, "_id": ASCENDING}},
        {"$limit": limit},
    ]


def decade_expression(field: str = "published_year") -> Document:
    """Decade key for a year field: ``floor(year / 10)``, so 1949 -> 194."""
    return {"$floor": {"$divide": [f"${field}", 10]}}


def books_by_decade_pipeline() -> Pipeline:
    """``{_id: {decade}, totalBooks}`` rows ordered by decade."""
    return [
        {
            "$group": {
                "_id": {"decade": decade_expression()},
                "totalBooks": {"$sum": 1},
            }
        },
        {"$sort": {"_id.decade": 1}},
    ]


def explain_find_command(collection_name: str, filter_doc: Document) -> Document:
    """The ``find`` command wrapped by ``explain``."""
    return {"find": collection_name, "filter": filter_doc}

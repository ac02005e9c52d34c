"""Integration tests for seeding the book collection.

Requirements:
- MongoDB must be reachable at MONGODB_URI (default mongodb://localhost:27017)
- Tests write to the plp_bookstore_test database and drop it afterwards
"""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest

from bookstore.catalog import BOOKS, books_by_title
from bookstore.config import MongoSettings
from bookstore.models import Book
from scripts.seed_books import SeedingConfig, seed_all, seed_collection
from scripts.validate_seed import run_full_validation

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
TEST_DATABASE = "plp_bookstore_test"
TEST_COLLECTION = "books"


def mongodb_available() -> bool:
    """Check if MongoDB is available for testing."""
    try:
        from pymongo import MongoClient

        client = MongoClient(MONGODB_URI, serverSelectionTimeoutMS=1000)
        try:
            client.admin.command("ping")
        finally:
            client.close()
        return True
    except Exception:
        return False


pytestmark = [
    pytest.mark.integration,
    pytest.mark.requires_mongodb,
    pytest.mark.skipif(
        not mongodb_available(),
        reason=f"MongoDB not available at {MONGODB_URI}",
    ),
]


@pytest.fixture(scope="module")
def mongo_client() -> Generator[Any, None, None]:
    from pymongo import MongoClient

    client = MongoClient(MONGODB_URI, serverSelectionTimeoutMS=1000)
    yield client
    client.drop_database(TEST_DATABASE)
    client.close()


@pytest.fixture
def books_collection(mongo_client: Any) -> Generator[Any, None, None]:
    """An empty test collection, dropped after each test."""
    collection = mongo_client[TEST_DATABASE][TEST_COLLECTION]
    collection.drop()
    yield collection
    collection.drop()


class TestSeeding:
    """Seeding writes exactly the catalog."""

    def test_seeded_collection_has_twelve_books(self, books_collection: Any) -> None:
        seed_collection(books_collection, BOOKS)

        assert books_collection.count_documents({}) == 12

    def test_seeded_values_match_catalog(self, books_collection: Any) -> None:
        seed_collection(books_collection, BOOKS)

        stored = {doc["title"]: Book.from_dict(doc) for doc in books_collection.find({})}
        assert stored == books_by_title()

    def test_reseeding_replaces_instead_of_appending(self, books_collection: Any) -> None:
        seed_collection(books_collection, BOOKS)
        books_collection.insert_one({"title": "Stray", "author": "Nobody"})

        stats = seed_collection(books_collection, BOOKS)

        assert stats.dropped is True
        assert stats.existing_count == 13
        assert books_collection.count_documents({}) == 12
        assert books_collection.count_documents({"title": "Stray"}) == 0

    def test_stats_read_back_inserted_books(self, books_collection: Any) -> None:
        stats = seed_collection(books_collection, BOOKS)

        assert stats.inserted_count == 12
        assert sorted(b.title for b in stats.books) == sorted(b.title for b in BOOKS)

    def test_seeded_collection_validates(self, books_collection: Any) -> None:
        seed_collection(books_collection, BOOKS)

        report = run_full_validation(books_collection)

        assert report.all_passed, [f.name for f in report.failures]


class TestSeedAll:
    """End-to-end through the configured client."""

    def test_seed_all_uses_settings(self, books_collection: Any) -> None:
        settings = MongoSettings(
            uri=MONGODB_URI,
            database=TEST_DATABASE,
            collection=TEST_COLLECTION,
            timeout_ms=1000,
        )

        stats = seed_all(SeedingConfig(settings=settings))

        assert stats.inserted_count == 12
        assert books_collection.count_documents({}) == 12

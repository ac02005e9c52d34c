"""Unit tests for the seeder (scripts/seed_books.py).

The collection and client are mocked; the real drop/insert behaviour is
covered by tests/integration/test_mongodb_seeding.py.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from pymongo.errors import ServerSelectionTimeoutError

from bookstore.catalog import BOOKS, catalog_documents
from bookstore.config import MongoSettings, SettingsError
from bookstore.models import Book
from bookstore.validation import RecordValidationError
from scripts.seed_books import SeedingConfig, SeedingStats, main, seed_all, seed_collection


@pytest.fixture
def seeded_collection(mock_collection: MagicMock) -> MagicMock:
    """A mock collection that behaves as if the insert succeeded."""
    mock_collection.count_documents.return_value = 0
    mock_collection.insert_many.return_value.inserted_ids = list(range(len(BOOKS)))
    mock_collection.find.return_value = [
        {"_id": index, **doc} for index, doc in enumerate(catalog_documents())
    ]
    return mock_collection


class TestSeedCollection:
    """Tests for seed_collection."""

    def test_empty_collection_is_not_dropped(self, seeded_collection: MagicMock) -> None:
        stats = seed_collection(seeded_collection, BOOKS)

        seeded_collection.drop.assert_not_called()
        assert stats.dropped is False
        assert stats.existing_count == 0

    def test_non_empty_collection_is_dropped_before_insert(self, seeded_collection: MagicMock) -> None:
        seeded_collection.count_documents.return_value = 12

        stats = seed_collection(seeded_collection, BOOKS)

        call_names = [c[0] for c in seeded_collection.method_calls]
        assert call_names.index("drop") < call_names.index("insert_many")
        assert stats.dropped is True
        assert stats.existing_count == 12

    def test_inserts_every_catalog_document(self, seeded_collection: MagicMock) -> None:
        stats = seed_collection(seeded_collection, BOOKS)

        seeded_collection.insert_many.assert_called_once_with(catalog_documents())
        assert stats.inserted_count == 12

    def test_reads_back_inserted_books(self, seeded_collection: MagicMock) -> None:
        stats = seed_collection(seeded_collection, BOOKS)

        seeded_collection.find.assert_called_once_with({})
        assert stats.books == list(BOOKS)

    def test_invalid_books_are_not_written(self, seeded_collection: MagicMock) -> None:
        broken = Book(
            title="",
            author="Nobody",
            genre="None",
            published_year=2000,
            price=1.0,
            in_stock=True,
            pages=1,
            publisher="Nobody",
        )

        with pytest.raises(RecordValidationError):
            seed_collection(seeded_collection, [broken])

        seeded_collection.drop.assert_not_called()
        seeded_collection.insert_many.assert_not_called()


class TestSeedAll:
    """Tests for seed_all connection handling."""

    def test_client_closed_after_success(self, seeded_collection: MagicMock) -> None:
        client = MagicMock()

        with patch("scripts.seed_books.get_mongo_client", return_value=client), \
             patch("scripts.seed_books.get_collection", return_value=seeded_collection):
            stats = seed_all(SeedingConfig())

        client.close.assert_called_once()
        assert stats.inserted_count == 12

    def test_client_closed_after_failure(self, mock_collection: MagicMock) -> None:
        client = MagicMock()
        mock_collection.count_documents.side_effect = ServerSelectionTimeoutError("no servers")

        with patch("scripts.seed_books.get_mongo_client", return_value=client), \
             patch("scripts.seed_books.get_collection", return_value=mock_collection), \
             pytest.raises(ServerSelectionTimeoutError):
            seed_all(SeedingConfig())

        client.close.assert_called_once()


class TestSeedBooksCommand:
    """Tests for the seed-books CLI."""

    def test_prints_numbered_summary(self) -> None:
        stats = SeedingStats(existing_count=12, dropped=True, inserted_count=12, books=list(BOOKS))

        with patch("scripts.seed_books.MongoSettings.from_env", return_value=MongoSettings()), \
             patch("scripts.seed_books.seed_all", return_value=stats):
            result = CliRunner().invoke(main, [])

        assert result.exit_code == 0
        assert '1. "To Kill a Mockingbird" by Harper Lee (1960)' in result.output
        assert '12. "Wuthering Heights" by Emily Brontë (1847)' in result.output
        assert "12 books successfully inserted" in result.output
        assert "Dropped" in result.output

    def test_cli_overrides_reach_settings(self) -> None:
        stats = SeedingStats(inserted_count=12, books=list(BOOKS))

        with patch("scripts.seed_books.MongoSettings.from_env", return_value=MongoSettings()), \
             patch("scripts.seed_books.seed_all", return_value=stats) as mock_seed:
            CliRunner().invoke(main, ["--database", "shop", "--collection", "inventory"])

        config = mock_seed.call_args.args[0]
        assert config.settings.database == "shop"
        assert config.settings.collection == "inventory"

    def test_database_error_exits_non_zero(self) -> None:
        with patch("scripts.seed_books.MongoSettings.from_env", return_value=MongoSettings()), \
             patch("scripts.seed_books.seed_all", side_effect=ServerSelectionTimeoutError("no servers")):
            result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "no servers" in result.output

    def test_invalid_uri_exits_one_with_error(self) -> None:
        settings = MongoSettings(uri="notmongo://host")
        with patch("scripts.seed_books.MongoSettings.from_env", return_value=settings):
            result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_bad_environment_exits_one_with_error(self) -> None:
        error = SettingsError("MONGODB_TIMEOUT_MS must be an integer, got 'abc'")
        with patch("scripts.seed_books.MongoSettings.from_env", side_effect=error), \
             patch("scripts.seed_books.seed_all") as mock_seed:
            result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "MONGODB_TIMEOUT_MS" in result.output
        mock_seed.assert_not_called()

"""Seed MongoDB with the fixed bookstore catalog.

This script:
1. Connects to the configured MongoDB endpoint
2. Drops the target collection when it already holds documents
3. Inserts the 12 catalog books
4. Reads them back and prints a numbered summary

The connection is always closed, including on failure. Errors are reported
once and the process exits non-zero; nothing is retried.

Usage:
    python scripts/seed_books.py
    python scripts/seed_books.py --uri mongodb://localhost:27017 --database plp_bookstore
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import click
from pymongo.errors import PyMongoError
from rich.console import Console

from bookstore.catalog import BOOKS, catalog_documents
from bookstore.config import MongoSettings, SettingsError, get_collection, get_mongo_client
from bookstore.models import Book
from bookstore.validation import RecordValidationError, ensure_valid

if TYPE_CHECKING:
    from pymongo.collection import Collection

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class SeedingConfig:
    """Configuration for a seeding run."""

    settings: MongoSettings = field(default_factory=MongoSettings)
    books: tuple[Book, ...] = BOOKS
    verbose: bool = False


@dataclass
class SeedingStats:
    """Outcome of a seeding run."""

    existing_count: int = 0
    dropped: bool = False
    inserted_count: int = 0
    books: list[Book] = field(default_factory=list)


def seed_collection(collection: Collection, books: tuple[Book, ...] | list[Book]) -> SeedingStats:
    """Replace the contents of ``collection`` with ``books``.

    The collection is dropped rather than appended to, so re-running leaves
    exactly ``len(books)`` documents behind.
    """
    stats = SeedingStats()
    documents = catalog_documents(books)
    ensure_valid(documents)

    stats.existing_count = collection.count_documents({})
    if stats.existing_count > 0:
        logger.info(
            "Collection %s holds %d documents, dropping",
            collection.name,
            stats.existing_count,
        )
        collection.drop()
        stats.dropped = True

    result = collection.insert_many(documents)
    stats.inserted_count = len(result.inserted_ids)
    logger.debug("Inserted ids: %s", result.inserted_ids)

    stats.books = [Book.from_dict(doc) for doc in collection.find({})]
    return stats


def seed_all(config: SeedingConfig) -> SeedingStats:
    """Run the full seed against the configured database.

    The client is closed whether or not seeding succeeds.
    """
    client = get_mongo_client(config.settings)

    try:
        collection = get_collection(client, config.settings)
        return seed_collection(collection, config.books)
    finally:
        client.close()
        logger.debug("Connection to %s closed", config.settings.redacted_uri)


def print_stats(stats: SeedingStats) -> None:
    """Render the seeding outcome."""
    if stats.dropped:
        console.print(
            f"  [yellow]⚠ Collection already contained {stats.existing_count} documents. "
            "Dropped it.[/yellow]"
        )
    console.print(f"  ✓ {stats.inserted_count} books successfully inserted!")

    console.print("\n[bold]📚 Inserted books:[/bold]")
    for index, book in enumerate(stats.books, start=1):
        console.print(f"  {book.summary_line(index)}", markup=False)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


@click.command()
@click.option("--uri", type=str, default=None, help="MongoDB connection string (overrides MONGODB_URI)")
@click.option("--database", type=str, default=None, help="Database name (overrides MONGODB_DATABASE)")
@click.option("--collection", type=str, default=None, help="Collection name (overrides MONGODB_COLLECTION)")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
def main(
    uri: str | None,
    database: str | None,
    collection: str | None,
    verbose: bool,
) -> None:
    """Seed MongoDB with the bookstore catalog."""
    _configure_logging(verbose)

    try:
        settings = MongoSettings.from_env().with_overrides(uri, database, collection)
    except SettingsError as e:
        logger.error("Invalid settings: %s", e)
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e
    config = SeedingConfig(settings=settings, verbose=verbose)

    console.print("\n[bold blue]Seeding MongoDB...[/bold blue]")
    console.print(f"  Target: {settings.redacted_uri} → {settings.database}.{settings.collection}\n")

    try:
        stats = seed_all(config)
    except (PyMongoError, RecordValidationError) as e:
        logger.error("Seeding failed: %s", e)
        console.print(f"[red]Error:[/red] {e}")
        console.print("🔒 Connection closed")
        raise SystemExit(1) from e

    print_stats(stats)
    console.print("\n🔒 Connection closed")
    console.print("[bold green]MongoDB seeding complete![/bold green]")


if __name__ == "__main__":
    main()

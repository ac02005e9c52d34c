"""Run the bookstore query walkthrough against a seeded collection.

Steps, executed in order, each printed before the next starts:

Basic queries
  1. Books in a genre
  2. Books published after a year
  3. Books by an author
  4. Update the price of one book, matched by title
  5. Delete one book, matched by title

Advanced queries
  6. In-stock books published after a year, projected to title/author/price,
     sorted by ascending price, with skip and limit

Aggregation pipelines
  7. Average price per genre
  8. Author with the most books
  9. Number of books per decade

Indexing
  10. Create a title index and an (author, published_year) index, then
      explain a lookup by title

Run ``seed_books.py`` first. Steps 4 and 5 mutate the collection.

Usage:
    python scripts/run_queries.py
    python scripts/run_queries.py --genre Fiction --after-year 1950
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from rich.console import Console

from bookstore import pipelines
from bookstore.config import MongoSettings, SettingsError, get_collection, get_mongo_client

if TYPE_CHECKING:
    from pymongo.collection import Collection

console = Console()
logger = logging.getLogger(__name__)

# Defaults for the walkthrough parameters
DEFAULT_GENRE = "Self-help"
DEFAULT_AFTER_YEAR = 2010
DEFAULT_AUTHOR = "George Orwell"
DEFAULT_UPDATE_TITLE = "1984"
DEFAULT_NEW_PRICE = 1500
DEFAULT_DELETE_TITLE = "The Hobbit"
DEFAULT_LIMIT = 5
DEFAULT_SKIP = 0
DEFAULT_EXPLAIN_TITLE = "Sapiens"
EXPLAIN_VERBOSITY = "executionStats"

SECTION_BASIC = "Basic Queries"
SECTION_ADVANCED = "Advanced Queries"
SECTION_AGGREGATION = "Aggregation Pipelines"
SECTION_INDEXING = "Indexing"


@dataclass
class QueryConfig:
    """Parameters for one walkthrough run."""

    settings: MongoSettings = field(default_factory=MongoSettings)
    genre: str = DEFAULT_GENRE
    after_year: int = DEFAULT_AFTER_YEAR
    author: str = DEFAULT_AUTHOR
    update_title: str = DEFAULT_UPDATE_TITLE
    new_price: float = DEFAULT_NEW_PRICE
    delete_title: str = DEFAULT_DELETE_TITLE
    limit: int = DEFAULT_LIMIT
    skip: int = DEFAULT_SKIP
    explain_title: str = DEFAULT_EXPLAIN_TITLE
    verbose: bool = False


@dataclass
class QueryResult:
    """Output of a single walkthrough step."""

    step: int
    section: str
    title: str
    result: Any


# =============================================================================
# Basic queries
# =============================================================================


def find_by_genre(collection: Collection, genre: str) -> list[dict[str, Any]]:
    return list(collection.find(pipelines.genre_filter(genre)))


def find_published_after(collection: Collection, year: int) -> list[dict[str, Any]]:
    return list(collection.find(pipelines.published_after_filter(year)))


def find_by_author(collection: Collection, author: str) -> list[dict[str, Any]]:
    return list(collection.find(pipelines.author_filter(author)))


def update_price(collection: Collection, title: str, price: float) -> dict[str, int]:
    """Set the price of the first book with ``title``."""
    result = collection.update_one(
        pipelines.title_filter(title),
        pipelines.set_price_update(price),
    )
    if result.matched_count == 0:
        logger.warning("No book titled %r to update", title)
    return {"matched": result.matched_count, "modified": result.modified_count}


def delete_by_title(collection: Collection, title: str) -> dict[str, int]:
    """Delete the first book with ``title``."""
    result = collection.delete_one(pipelines.title_filter(title))
    if result.deleted_count == 0:
        logger.warning("No book titled %r to delete", title)
    return {"deleted": result.deleted_count}


# =============================================================================
# Advanced queries
# =============================================================================


def find_in_stock_listing(
    collection: Collection,
    year: int,
    limit: int = DEFAULT_LIMIT,
    skip: int = DEFAULT_SKIP,
) -> list[dict[str, Any]]:
    """In-stock books after ``year``, cheapest first, one page of results."""
    cursor = (
        collection.find(
            pipelines.in_stock_published_after_filter(year),
            pipelines.LISTING_PROJECTION,
        )
        .sort("price", ASCENDING)
        .skip(skip)
        .limit(limit)
    )
    return list(cursor)


# =============================================================================
# Aggregation pipelines
# =============================================================================


def average_price_by_genre(collection: Collection) -> list[dict[str, Any]]:
    return list(collection.aggregate(pipelines.average_price_by_genre_pipeline()))


def top_authors(collection: Collection, limit: int = 1) -> list[dict[str, Any]]:
    return list(collection.aggregate(pipelines.top_author_pipeline(limit)))


def count_by_decade(collection: Collection) -> list[dict[str, Any]]:
    return list(collection.aggregate(pipelines.books_by_decade_pipeline()))


# =============================================================================
# Indexing
# =============================================================================


def create_indexes(collection: Collection) -> list[str]:
    """Create the title and (author, published_year) indexes.

    Returns the index names; creating an existing index is a no-op.
    """
    return [
        collection.create_index(pipelines.TITLE_INDEX_KEYS),
        collection.create_index(pipelines.AUTHOR_YEAR_INDEX_KEYS),
    ]


def explain_title_lookup(collection: Collection, title: str) -> dict[str, Any]:
    """Execution statistics for a lookup by title."""
    explanation = collection.database.command(
        "explain",
        pipelines.explain_find_command(collection.name, pipelines.title_filter(title)),
        verbosity=EXPLAIN_VERBOSITY,
    )
    return explanation.get("executionStats", {})


def _format_price(price: float) -> str:
    """Whole prices without a trailing ``.0``."""
    return str(int(price)) if float(price).is_integer() else str(price)


def iter_queries(collection: Collection, config: QueryConfig) -> Iterator[QueryResult]:
    """Run each step in order, yielding its result before starting the next."""
    yield QueryResult(
        1, SECTION_BASIC, f"Books in genre {config.genre!r}",
        find_by_genre(collection, config.genre),
    )
    yield QueryResult(
        2, SECTION_BASIC, f"Books published after {config.after_year}",
        find_published_after(collection, config.after_year),
    )
    yield QueryResult(
        3, SECTION_BASIC, f"Books by {config.author}",
        find_by_author(collection, config.author),
    )
    yield QueryResult(
        4, SECTION_BASIC, f"Set price of {config.update_title!r} to {_format_price(config.new_price)}",
        update_price(collection, config.update_title, config.new_price),
    )
    yield QueryResult(
        5, SECTION_BASIC, f"Delete {config.delete_title!r}",
        delete_by_title(collection, config.delete_title),
    )
    yield QueryResult(
        6, SECTION_ADVANCED,
        f"In stock and published after {config.after_year}, by price "
        f"(skip {config.skip}, limit {config.limit})",
        find_in_stock_listing(collection, config.after_year, config.limit, config.skip),
    )
    yield QueryResult(
        7, SECTION_AGGREGATION, "Average price per genre",
        average_price_by_genre(collection),
    )
    yield QueryResult(
        8, SECTION_AGGREGATION, "Author with the most books",
        top_authors(collection),
    )
    yield QueryResult(
        9, SECTION_AGGREGATION, "Books per decade",
        count_by_decade(collection),
    )

    index_names = create_indexes(collection)
    logger.info("Indexes ready: %s", ", ".join(index_names))
    yield QueryResult(
        10, SECTION_INDEXING, f"Explain lookup of {config.explain_title!r}",
        explain_title_lookup(collection, config.explain_title),
    )


def run_all(collection: Collection, config: QueryConfig) -> list[QueryResult]:
    """Run every step and collect the results."""
    return list(iter_queries(collection, config))


def print_result(query: QueryResult) -> None:
    console.rule(f"[bold cyan]{query.step}. {query.title}[/bold cyan]")
    if query.result == []:
        console.print("[dim](no documents)[/dim]")
    else:
        console.print(query.result)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


@click.command()
@click.option("--uri", type=str, default=None, help="MongoDB connection string (overrides MONGODB_URI)")
@click.option("--database", type=str, default=None, help="Database name (overrides MONGODB_DATABASE)")
@click.option("--collection", type=str, default=None, help="Collection name (overrides MONGODB_COLLECTION)")
@click.option("--genre", type=str, default=DEFAULT_GENRE, show_default=True, help="Genre to filter by")
@click.option("--after-year", type=int, default=DEFAULT_AFTER_YEAR, show_default=True,
              help="Published-year threshold (exclusive)")
@click.option("--author", type=str, default=DEFAULT_AUTHOR, show_default=True, help="Author to filter by")
@click.option("--update-title", type=str, default=DEFAULT_UPDATE_TITLE, show_default=True,
              help="Title of the book whose price is updated")
@click.option("--new-price", type=float, default=DEFAULT_NEW_PRICE, show_default=True, help="New price")
@click.option("--delete-title", type=str, default=DEFAULT_DELETE_TITLE, show_default=True,
              help="Title of the book to delete")
@click.option("--limit", type=click.IntRange(min=0), default=DEFAULT_LIMIT, show_default=True,
              help="Page size for the in-stock listing")
@click.option("--skip", type=click.IntRange(min=0), default=DEFAULT_SKIP, show_default=True,
              help="Offset for the in-stock listing")
@click.option("--explain-title", type=str, default=DEFAULT_EXPLAIN_TITLE, show_default=True,
              help="Title used for the explained lookup")
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
    genre: str,
    after_year: int,
    author: str,
    update_title: str,
    new_price: float,
    delete_title: str,
    limit: int,
    skip: int,
    explain_title: str,
    verbose: bool,
) -> None:
    """Run CRUD, aggregation and indexing queries against the book collection."""
    _configure_logging(verbose)

    client = None
    try:
        settings = MongoSettings.from_env().with_overrides(uri, database, collection)
        config = QueryConfig(
            settings=settings,
            genre=genre,
            after_year=after_year,
            author=author,
            update_title=update_title,
            new_price=new_price,
            delete_title=delete_title,
            limit=limit,
            skip=skip,
            explain_title=explain_title,
            verbose=verbose,
        )
        console.print(f"\n[bold blue]Querying {settings.database}.{settings.collection}...[/bold blue]")

        client = get_mongo_client(settings)
        books = get_collection(client, settings)
        section = None
        for query in iter_queries(books, config):
            if query.section != section:
                section = query.section
                console.print(f"\n[bold]=== {section} ===[/bold]")
            print_result(query)
    except (PyMongoError, SettingsError) as e:
        logger.error("Query failed: %s", e)
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e
    finally:
        if client is not None:
            client.close()
            console.print("\n🔒 Connection closed")


if __name__ == "__main__":
    main()

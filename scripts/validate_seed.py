"""Validate the seeded book collection against the catalog.

This script validates:
1. Document count matches the catalog
2. Every catalog title is present once with matching field values, and no
   other title is stored
3. Every stored document passes the book JSON schema
4. The query indexes exist (informational, created by run_queries.py)

Usage:
    python scripts/validate_seed.py
    python scripts/validate_seed.py --verbose
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.table import Table

from bookstore.catalog import BOOKS, books_by_title
from bookstore.config import MongoSettings, SettingsError, get_collection, get_mongo_client
from bookstore.models import Book
from bookstore.validation import validate_record

if TYPE_CHECKING:
    from pymongo.collection import Collection

console = Console()
logger = logging.getLogger(__name__)

EXPECTED_INDEXES = ("title_1", "author_1_published_year_1")


@dataclass
class ValidationResult:
    """Result of a validation check."""

    name: str
    expected: int | None
    actual: int
    passed: bool
    message: str = ""


@dataclass
class ValidationReport:
    """Complete validation report.

    Index checks are informational and do not affect ``all_passed``.
    """

    counts: list[ValidationResult] = field(default_factory=list)
    records: list[ValidationResult] = field(default_factory=list)
    schema: list[ValidationResult] = field(default_factory=list)
    indexes: list[ValidationResult] = field(default_factory=list)

    @property
    def required(self) -> list[ValidationResult]:
        return self.counts + self.records + self.schema

    @property
    def all_passed(self) -> bool:
        """Check if all required validations passed."""
        return all(r.passed for r in self.required)

    @property
    def failures(self) -> list[ValidationResult]:
        """Get all failed required validations."""
        return [r for r in self.required if not r.passed]


def validate_count(collection: Collection, books: tuple[Book, ...] | list[Book]) -> ValidationResult:
    actual = collection.count_documents({})
    expected = len(books)
    return ValidationResult(
        name="Documents",
        expected=expected,
        actual=actual,
        passed=actual == expected,
        message="" if actual == expected else f"expected {expected}, found {actual}",
    )


def validate_records(
    documents: list[dict[str, Any]],
    books: tuple[Book, ...] | list[Book],
) -> list[ValidationResult]:
    """Compare stored documents with the catalog.

    One result per catalog title, followed by one failing result per stored
    title the catalog does not contain.
    """
    results = []
    catalog = books_by_title(books)
    occurrences = Counter(doc.get("title") for doc in documents)
    stored = {doc.get("title"): doc for doc in documents}

    for book in catalog.values():
        found = occurrences.get(book.title, 0)
        if found != 1:
            results.append(ValidationResult(
                name=book.title,
                expected=1,
                actual=found,
                passed=False,
                message="missing" if found == 0 else f"{found} copies",
            ))
            continue

        try:
            differing = book.diff(Book.from_dict(stored[book.title]))
        except (KeyError, TypeError, ValueError) as e:
            differing = [f"unreadable ({e})"]

        results.append(ValidationResult(
            name=book.title,
            expected=1,
            actual=1,
            passed=not differing,
            message="" if not differing else f"differs in: {', '.join(differing)}",
        ))

    for title, found in occurrences.items():
        if title not in catalog:
            results.append(ValidationResult(
                name=str(title),
                expected=0,
                actual=found,
                passed=False,
                message="not in catalog",
            ))

    return results


def validate_schema(documents: list[dict[str, Any]]) -> list[ValidationResult]:
    """Run every stored document through the book schema."""
    invalid = {}
    for doc in documents:
        errors = validate_record(doc)
        if errors:
            invalid[str(doc.get("title", doc.get("_id")))] = errors

    if not invalid:
        return [ValidationResult(
            name="Book schema",
            expected=0,
            actual=0,
            passed=True,
        )]

    return [
        ValidationResult(
            name=f"Book schema: {title}",
            expected=0,
            actual=len(errors),
            passed=False,
            message="; ".join(errors),
        )
        for title, errors in invalid.items()
    ]


def validate_indexes(collection: Collection) -> list[ValidationResult]:
    """Check that the query indexes exist."""
    index_names = set(collection.index_information())
    results = []

    for name in EXPECTED_INDEXES:
        exists = name in index_names
        results.append(ValidationResult(
            name=f"Index: {name}",
            expected=1,
            actual=1 if exists else 0,
            passed=exists,
            message="" if exists else "not created yet (run run_queries.py)",
        ))

    return results


def run_full_validation(
    collection: Collection,
    books: tuple[Book, ...] | list[Book] = BOOKS,
) -> ValidationReport:
    """Run full validation and return report."""
    report = ValidationReport()
    documents = list(collection.find({}))

    report.counts.append(validate_count(collection, books))
    report.records = validate_records(documents, books)
    report.schema = validate_schema(documents)
    report.indexes = validate_indexes(collection)

    return report


def _status(result: ValidationResult, failure_color: str = "red") -> str:
    status = "✓" if result.passed else "✗"
    color = "green" if result.passed else failure_color
    status_text = f"[{color}]{status}[/{color}]"
    if result.message:
        status_text += f" {result.message}"
    return status_text


def print_report(report: ValidationReport, verbose: bool = False) -> None:
    """Render the report as rich tables."""
    table = Table(title="Collection")
    table.add_column("Check", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Status", justify="center")
    for result in report.counts + report.schema:
        table.add_row(result.name, str(result.actual), _status(result))
    console.print(table)
    console.print()

    records = report.records if verbose else [r for r in report.records if not r.passed]
    if records:
        table = Table(title="Catalog Records")
        table.add_column("Title", style="cyan")
        table.add_column("Found", justify="right")
        table.add_column("Status", justify="center")
        for result in records:
            table.add_row(result.name, str(result.actual), _status(result))
        console.print(table)
        console.print()

    table = Table(title="Indexes")
    table.add_column("Name", style="cyan")
    table.add_column("Status", justify="center")
    for result in report.indexes:
        table.add_row(result.name, _status(result, failure_color="yellow"))
    console.print(table)
    console.print()


@click.command()
@click.option("--uri", type=str, default=None, help="MongoDB connection string (overrides MONGODB_URI)")
@click.option("--database", type=str, default=None, help="Database name (overrides MONGODB_DATABASE)")
@click.option("--collection", type=str, default=None, help="Collection name (overrides MONGODB_COLLECTION)")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output (lists every catalog record)",
)
def main(uri: str | None, database: str | None, collection: str | None, verbose: bool) -> None:
    """Validate seeded book collection integrity."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    client = None
    try:
        settings = MongoSettings.from_env().with_overrides(uri, database, collection)
        console.print("\n[bold blue]Validating seed integrity...[/bold blue]\n")

        client = get_mongo_client(settings)
        report = run_full_validation(get_collection(client, settings))
    except (PyMongoError, SettingsError) as e:
        logger.error("Validation failed: %s", e)
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e
    finally:
        if client is not None:
            client.close()

    print_report(report, verbose)

    if report.all_passed:
        console.print("[bold green]✓ All validations passed![/bold green]\n")
        return

    console.print("[bold yellow]⚠ Some validations failed:[/bold yellow]")
    for failure in report.failures:
        console.print(f"  - {failure.name}: {failure.message or 'Failed'}")
    console.print()
    raise SystemExit(1)


if __name__ == "__main__":
    main()

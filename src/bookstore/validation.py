"""JSON schema validation for book documents."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

BOOK_SCHEMA_PATH = Path(__file__).parent / "schemas" / "book.schema.json"


class RecordValidationError(Exception):
    """Raised when seed data does not match the book schema."""

    def __init__(self, errors: dict[int, list[str]]) -> None:
        self.errors = errors
        details = "; ".join(
            f"record {index}: {', '.join(messages)}"
            for index, messages in sorted(errors.items())
        )
        super().__init__(f"{len(errors)} invalid record(s): {details}")


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a JSON schema from file."""
    with open(schema_path, encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=1)
def book_schema() -> dict[str, Any]:
    return load_schema(BOOK_SCHEMA_PATH)


def validate_record(record: dict[str, Any], schema: dict[str, Any] | None = None) -> list[str]:
    """Validate a single document against the book schema.

    Returns:
        List of validation errors (empty if valid)
    """
    validator = jsonschema.Draft7Validator(schema or book_schema())
    return [
        f"{'.'.join(str(p) for p in error.path) or '<root>'}: {error.message}"
        for error in sorted(validator.iter_errors(record), key=lambda e: [str(p) for p in e.path])
    ]


def validate_records(records: list[dict[str, Any]]) -> dict[int, list[str]]:
    """Validate many documents.

    Returns:
        Dict mapping record position to its validation errors
    """
    results: dict[int, list[str]] = {}

    for index, record in enumerate(records):
        errors = validate_record(record)
        if errors:
            results[index] = errors

    return results


def ensure_valid(records: list[dict[str, Any]]) -> None:
    """Raise RecordValidationError if any record is invalid."""
    errors = validate_records(records)
    if errors:
        raise RecordValidationError(errors)

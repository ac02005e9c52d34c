"""Pytest configuration and fixtures for plp-bookstore."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from bookstore.config import MongoSettings

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def scripts_dir(project_root: Path) -> Path:
    """Return the scripts directory."""
    return project_root / "scripts"


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_book_document() -> dict[str, Any]:
    """Return a valid book document for testing."""
    return {
        "title": "Test Book",
        "author": "Test Author",
        "genre": "Testing",
        "published_year": 2024,
        "price": 19.99,
        "in_stock": True,
        "pages": 250,
        "publisher": "Test Publisher",
    }


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def mongo_settings() -> MongoSettings:
    """Return settings pointing at a local test database."""
    return MongoSettings(
        uri="mongodb://localhost:27017",
        database="plp_bookstore_test",
        collection="books",
        timeout_ms=1000,
    )


@pytest.fixture
def mock_collection() -> MagicMock:
    """A stand-in for ``pymongo.collection.Collection``."""
    collection = MagicMock()
    collection.name = "books"
    return collection


# ============================================================================
# Markers
# ============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (deselect with '-m \"not integration\"')",
    )
    config.addinivalue_line(
        "markers",
        "requires_mongodb: marks tests requiring a MongoDB connection",
    )

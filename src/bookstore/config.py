"""MongoDB connection settings resolved from the environment.

Values come from environment variables, with a ``.env`` file in the working
directory loaded first. Credentials belong in ``MONGODB_URI`` and are never
hardcoded; see ``.env.example``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

from dotenv import load_dotenv

if TYPE_CHECKING:
    from pymongo import MongoClient
    from pymongo.collection import Collection

DEFAULT_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "plp_bookstore"
DEFAULT_COLLECTION = "books"
DEFAULT_TIMEOUT_MS = 5000

ENV_URI = "MONGODB_URI"
ENV_DATABASE = "MONGODB_DATABASE"
ENV_COLLECTION = "MONGODB_COLLECTION"
ENV_TIMEOUT_MS = "MONGODB_TIMEOUT_MS"


class SettingsError(ValueError):
    """Raised when an environment variable holds an unusable value."""


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class MongoSettings:
    """Where the book collection lives."""

    uri: str = DEFAULT_URI
    database: str = DEFAULT_DATABASE
    collection: str = DEFAULT_COLLECTION
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> MongoSettings:
        """Build settings from environment variables (and ``.env``).

        Raises SettingsError when MONGODB_TIMEOUT_MS is not an integer.
        """
        load_dotenv()

        return cls(
            uri=os.getenv(ENV_URI, DEFAULT_URI),
            database=os.getenv(ENV_DATABASE, DEFAULT_DATABASE),
            collection=os.getenv(ENV_COLLECTION, DEFAULT_COLLECTION),
            timeout_ms=_int_env(ENV_TIMEOUT_MS, DEFAULT_TIMEOUT_MS),
        )

    def with_overrides(
        self,
        uri: str | None = None,
        database: str | None = None,
        collection: str | None = None,
    ) -> MongoSettings:
        """Return a copy with any non-empty CLI overrides applied."""
        changes = {
            key: value
            for key, value in (("uri", uri), ("database", database), ("collection", collection))
            if value
        }
        return replace(self, **changes)

    @property
    def redacted_uri(self) -> str:
        """The URI with any password masked, safe for logs."""
        parts = urlsplit(self.uri)
        if not parts.password:
            return self.uri
        netloc = parts.netloc.replace(f":{parts.password}@", ":****@", 1)
        return urlunsplit(parts._replace(netloc=netloc))


def get_mongo_client(settings: MongoSettings) -> MongoClient:
    """Create a MongoClient for ``settings``.

    One client per script run; callers close it when they are done.
    """
    from pymongo import MongoClient

    return MongoClient(settings.uri, serverSelectionTimeoutMS=settings.timeout_ms)


def get_collection(client: MongoClient, settings: MongoSettings) -> Collection:
    """Resolve the configured collection on ``client``."""
    return client[settings.database][settings.collection]

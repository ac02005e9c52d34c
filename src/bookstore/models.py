"""Data model for book records stored in MongoDB."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class Book:
    """A single book document.

    Fields map one-to-one onto the keys of the stored document. The MongoDB
    ``_id`` is not part of the model; it is dropped on read and never written.
    """

    title: str
    author: str
    genre: str
    published_year: int
    price: float
    in_stock: bool
    pages: int
    publisher: str

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return document keys in declaration order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        """Create a Book from a MongoDB document."""
        return cls(
            title=data["title"],
            author=data["author"],
            genre=data["genre"],
            published_year=int(data["published_year"]),
            price=float(data["price"]),
            in_stock=bool(data["in_stock"]),
            pages=int(data["pages"]),
            publisher=data["publisher"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a fresh document suitable for ``insert_many``."""
        return asdict(self)

    def summary_line(self, index: int) -> str:
        """Render the numbered line printed after seeding."""
        return f'{index}. "{self.title}" by {self.author} ({self.published_year})'

    def diff(self, other: Book) -> list[str]:
        """Return the names of fields whose values differ from ``other``."""
        return [
            name for name in self.field_names()
            if getattr(self, name) != getattr(other, name)
        ]

"""Bookstore domain package: book model, fixed catalog and MongoDB helpers."""

from .catalog import BOOKS, catalog_documents
from .config import MongoSettings, SettingsError, get_mongo_client
from .models import Book

__all__ = [
    "BOOKS",
    "Book",
    "MongoSettings",
    "SettingsError",
    "catalog_documents",
    "get_mongo_client",
]

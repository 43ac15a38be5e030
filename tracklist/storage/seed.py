"""
Book seeding for Tracklist.

The API has no book create path, so the catalogue is loaded from a JSON
file: a list of objects with ``title``, ``author`` and optional
``rating``/``price``.
"""

import json
from pathlib import Path
from typing import Union

from loguru import logger

from .book_repository import BookRepository
from .database import Database


def load_books_file(path: Union[str, Path]) -> list[dict]:
    """
    Read and check a books JSON file.

    Raises:
        ValueError: If the file is not a list of objects with a non-empty
            title and author.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of books")

    books = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: entry {i} is not an object")
        title = str(item.get("title") or "").strip()
        author = str(item.get("author") or "").strip()
        if not title or not author:
            raise ValueError(f"{path}: entry {i} needs a title and an author")
        books.append({
            "title": title,
            "author": author,
            "rating": item.get("rating"),
            "price": item.get("price"),
        })
    return books


def seed_books(database: Database, books: list[dict]) -> int:
    """Create tables if needed and insert the books. Returns the count inserted."""
    database.create_tables()
    count = BookRepository(database).bulk_create(books)
    logger.info(f"Seeded {count} books")
    return count

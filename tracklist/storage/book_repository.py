"""
Book Repository for Tracklist

Read access to the ``books`` table. Books are loaded out of band
(``scripts/seed_books.py``); the API never writes them.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger
from sqlalchemy import select, insert

from .database import Database, Row
from .models import BookModel


@dataclass
class StoredBook:
    """Data class for book data transfer."""

    id: int
    title: str
    author: str
    rating: Optional[float] = None
    price: Optional[float] = None

    @classmethod
    def from_row(cls, row: Row) -> "StoredBook":
        """Create from a result row."""
        return cls(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            rating=row["rating"],
            price=row["price"],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "rating": self.rating,
            "price": self.price,
        }


class BookRepository:
    """
    Repository for book lookups.

    Usage:
        repo = BookRepository(Database("sqlite:///./tracklist.db"))
        repo.search("dune")
    """

    def __init__(self, database: Database):
        self.database = database

    def list_all(self) -> list[StoredBook]:
        """List all books ordered by id."""
        rows = self.database.execute(
            select(BookModel.__table__).order_by(BookModel.id.asc())
        )
        return [StoredBook.from_row(r) for r in rows]

    def get(self, book_id: int) -> Optional[StoredBook]:
        """
        Get book by ID.

        Args:
            book_id: Book ID

        Returns:
            StoredBook or None
        """
        rows = self.database.execute(
            select(BookModel.__table__).where(BookModel.id == book_id)
        )
        return StoredBook.from_row(rows[0]) if rows else None

    def search(self, title: str) -> list[StoredBook]:
        """
        Case-insensitive substring match on title.

        Args:
            title: Search text

        Returns:
            Matching books ordered by id
        """
        pattern = f"%{title}%"
        rows = self.database.execute(
            select(BookModel.__table__)
            .where(BookModel.title.ilike(pattern))
            .order_by(BookModel.id.asc())
        )
        logger.debug(f"Title search '{title}' matched {len(rows)} books")
        return [StoredBook.from_row(r) for r in rows]

    def bulk_create(self, books: list[dict]) -> int:
        """
        Bulk insert books. Used by the seeding script, not the API.

        Args:
            books: List of dicts with ``title``, ``author`` and optional
                ``rating``/``price``

        Returns:
            Number inserted
        """
        if not books:
            return 0

        rows = [
            {
                "title": b["title"],
                "author": b["author"],
                "rating": b.get("rating"),
                "price": b.get("price"),
            }
            for b in books
        ]
        self.database.execute(insert(BookModel.__table__), rows)
        return len(rows)

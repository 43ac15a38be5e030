"""
Anime Repository for Tracklist

CRUD over the ``anime`` table. Every method issues exactly one statement.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger
from sqlalchemy import select, insert, update, delete

from .database import Database, Row
from .models import AnimeModel


MUTABLE_FIELDS = ("title", "status", "score")


@dataclass
class StoredAnime:
    """Data class for anime entry transfer."""

    id: int
    title: str
    status: str = "plan_to_watch"
    score: Optional[float] = None

    @classmethod
    def from_row(cls, row: Row) -> "StoredAnime":
        """Create from a result row."""
        return cls(
            id=row["id"],
            title=row["title"],
            status=row["status"],
            score=row["score"],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "score": self.score,
        }


class AnimeRepository:
    """Repository for anime list CRUD operations."""

    def __init__(self, database: Database):
        self.database = database

    def list_all(self) -> list[StoredAnime]:
        rows = self.database.execute(
            select(AnimeModel.__table__).order_by(AnimeModel.id.asc())
        )
        return [StoredAnime.from_row(r) for r in rows]

    def get(self, anime_id: int) -> Optional[StoredAnime]:
        rows = self.database.execute(
            select(AnimeModel.__table__).where(AnimeModel.id == anime_id)
        )
        return StoredAnime.from_row(rows[0]) if rows else None

    def create(
        self,
        title: str,
        status: str = "plan_to_watch",
        score: Optional[float] = None,
    ) -> StoredAnime:
        """
        Insert an anime entry. The store assigns the id.

        Returns:
            Created StoredAnime
        """
        rows = self.database.execute(
            insert(AnimeModel.__table__)
            .values(title=title, status=status, score=score)
            .returning(*AnimeModel.__table__.c)
        )
        entry = StoredAnime.from_row(rows[0])
        logger.debug(f"Inserted anime {entry.id}")
        return entry

    def update(self, anime_id: int, **updates) -> Optional[StoredAnime]:
        """
        Update only the supplied fields.

        Args:
            anime_id: Entry ID
            **updates: Any of ``title``, ``status``, ``score``

        Returns:
            Updated StoredAnime or None if no row matched
        """
        values = {k: v for k, v in updates.items() if k in MUTABLE_FIELDS}
        if not values:
            raise ValueError("No fields to update")

        rows = self.database.execute(
            update(AnimeModel.__table__)
            .where(AnimeModel.id == anime_id)
            .values(**values)
            .returning(*AnimeModel.__table__.c)
        )
        return StoredAnime.from_row(rows[0]) if rows else None

    def delete(self, anime_id: int) -> Optional[StoredAnime]:
        """Delete an entry, returning its prior state or None."""
        rows = self.database.execute(
            delete(AnimeModel.__table__)
            .where(AnimeModel.id == anime_id)
            .returning(*AnimeModel.__table__.c)
        )
        return StoredAnime.from_row(rows[0]) if rows else None

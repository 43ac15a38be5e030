"""
Database models for Tracklist.

Each table is a flat record keyed by a store-generated integer id.
AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, Float, CheckConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


ANIME_STATUSES = ("plan_to_watch", "watching", "completed")


class TodoModel(Base):
    """SQLAlchemy model for todos."""

    __tablename__ = "todos"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default="0")


class AnimeModel(Base):
    """SQLAlchemy model for anime list entries."""

    __tablename__ = "anime"
    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in ANIME_STATUSES) + ")",
            name="ck_anime_status",
        ),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    status = Column(String(20), nullable=False, default="plan_to_watch")
    score = Column(Float)


class BookModel(Base):
    """SQLAlchemy model for books. Rows are loaded out of band (see scripts/)."""

    __tablename__ = "books"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False, index=True)
    author = Column(String(500), nullable=False)
    rating = Column(Float)
    price = Column(Float)

"""
Storage Module for Tracklist

Relational storage for todos, anime entries and books:
- Pooled statement execution (SQLAlchemy engine)
- One repository per entity kind
- PostgreSQL for production, SQLite for development/testing
"""

from tracklist.storage.database import Database
from tracklist.storage.models import (
    Base,
    TodoModel,
    AnimeModel,
    BookModel,
    ANIME_STATUSES,
)
from tracklist.storage.todo_repository import (
    TodoRepository,
    StoredTodo,
)
from tracklist.storage.anime_repository import (
    AnimeRepository,
    StoredAnime,
)
from tracklist.storage.book_repository import (
    BookRepository,
    StoredBook,
)

__all__ = [
    # Database
    "Database",
    # Models
    "Base",
    "TodoModel",
    "AnimeModel",
    "BookModel",
    "ANIME_STATUSES",
    # Repositories
    "TodoRepository",
    "StoredTodo",
    "AnimeRepository",
    "StoredAnime",
    "BookRepository",
    "StoredBook",
]

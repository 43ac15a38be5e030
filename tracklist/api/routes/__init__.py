"""
API Routes for Tracklist

Route modules:
- todos: Todo CRUD
- anime: Anime watch list CRUD
- books: Read-only book lookup
"""

from tracklist.api.routes.todos import router as todos_router
from tracklist.api.routes.anime import router as anime_router
from tracklist.api.routes.books import router as books_router

__all__ = [
    "todos_router",
    "anime_router",
    "books_router",
]

"""
Tracklist - FastAPI Backend.

JSON API over todos, the anime watch list and books.
"""

from .main import app, create_app, main
from .dependencies import (
    Settings,
    get_settings,
    get_service_container,
    init_services,
    ServiceContainer,
)
from .schemas import (
    AnimeStatus,
    TodoCreate,
    TodoUpdate,
    TodoResponse,
    AnimeCreate,
    AnimeUpdate,
    AnimeResponse,
    BookResponse,
    DeleteRequest,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Application
    "app",
    "create_app",
    "main",
    # Dependencies
    "Settings",
    "get_settings",
    "get_service_container",
    "init_services",
    "ServiceContainer",
    # Schemas
    "AnimeStatus",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
    "AnimeCreate",
    "AnimeUpdate",
    "AnimeResponse",
    "BookResponse",
    "DeleteRequest",
    "HealthResponse",
    "ErrorResponse",
]

"""
Dependency injection for FastAPI routes.

Provides injectable dependencies for:
- Configuration
- The database (connection pool)
- Repository instances
"""

import os
from typing import Optional
from functools import lru_cache
from dataclasses import dataclass

from fastapi import Depends, Query, Request
from pydantic import ValidationError

from .middleware.error_handler import ClientFault
from .schemas import DeleteRequest, MAX_RECORD_ID


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class Settings:
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./tracklist.db"
    database_echo: bool = False

    # CORS
    cors_allowed_origins: str = ""

    # Environment
    environment: str = "development"
    debug: bool = True

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            database_echo=os.getenv("DATABASE_ECHO", "false").lower() == "true",
            cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", cls.cors_allowed_origins),
            environment=os.getenv("TRACKLIST_ENV", cls.environment),
            debug=os.getenv("DEBUG", "true").lower() == "true",
            host=os.getenv("TRACKLIST_HOST", cls.host),
            port=int(os.getenv("TRACKLIST_PORT", cls.port)),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()


# =============================================================================
# Service Dependencies (Lazy Loading)
# =============================================================================

class ServiceContainer:
    """
    Container for lazily built database and repository instances.

    The database (and its connection pool) is created on first access.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._database = None
        self._todo_repository = None
        self._anime_repository = None
        self._book_repository = None

    @property
    def database(self):
        """Get database instance."""
        if self._database is None:
            from ..storage.database import Database
            self._database = Database(
                self.settings.database_url,
                echo=self.settings.database_echo,
            )
        return self._database

    @property
    def todo_repository(self):
        """Get todo repository instance."""
        if self._todo_repository is None:
            from ..storage.todo_repository import TodoRepository
            self._todo_repository = TodoRepository(self.database)
        return self._todo_repository

    @property
    def anime_repository(self):
        """Get anime repository instance."""
        if self._anime_repository is None:
            from ..storage.anime_repository import AnimeRepository
            self._anime_repository = AnimeRepository(self.database)
        return self._anime_repository

    @property
    def book_repository(self):
        """Get book repository instance."""
        if self._book_repository is None:
            from ..storage.book_repository import BookRepository
            self._book_repository = BookRepository(self.database)
        return self._book_repository

    def close(self) -> None:
        """Release pooled connections."""
        if self._database is not None:
            self._database.dispose()


# Global service container
_service_container: Optional[ServiceContainer] = None


def init_services(settings: Settings) -> ServiceContainer:
    """Initialize service container."""
    global _service_container
    _service_container = ServiceContainer(settings)
    return _service_container


def get_service_container() -> ServiceContainer:
    """Get service container instance."""
    if _service_container is None:
        # Auto-initialize with default settings if not explicitly initialized
        return init_services(get_settings())
    return _service_container


# =============================================================================
# Individual Service Dependencies
# =============================================================================

def get_todo_repository(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for todo repository."""
    return container.todo_repository


def get_anime_repository(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for anime repository."""
    return container.anime_repository


def get_book_repository(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for book repository."""
    return container.book_repository


# =============================================================================
# Request Context Dependencies
# =============================================================================

async def resolve_delete_id(
    request: Request,
    record_id: Optional[int] = Query(
        None, alias="id", ge=1, le=MAX_RECORD_ID, description="Record ID"
    ),
) -> int:
    """
    Resolve the id of a delete request.

    Accepted from the query string (``?id=3``) or, when absent there,
    from a JSON body (``{"id": 3}``).

    Raises:
        ClientFault: If neither carries a valid id.
    """
    if record_id is not None:
        return record_id

    body = await request.body()
    if not body.strip():
        raise ClientFault("id is required", detail="Pass id as a query parameter or JSON body")

    try:
        payload = DeleteRequest.model_validate_json(body)
    except ValidationError as e:
        raise ClientFault("Invalid delete request", detail=str(e.errors()[0].get("msg"))) from e

    return payload.id

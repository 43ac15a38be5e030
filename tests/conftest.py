"""
Pytest configuration and fixtures for Tracklist tests.
"""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from tracklist.api.main import create_app
from tracklist.api.dependencies import (
    Settings,
    ServiceContainer,
    get_service_container,
    init_services,
)
from tracklist.storage.database import Database
from tracklist.storage.todo_repository import TodoRepository
from tracklist.storage.anime_repository import AnimeRepository
from tracklist.storage.book_repository import BookRepository


# =============================================================================
# Test Settings
# =============================================================================

def get_test_settings() -> Settings:
    """Return settings configured for testing."""
    return Settings(
        database_url="sqlite:///:memory:",
        database_echo=False,
        environment="test",
        debug=True,
    )


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Fresh in-memory database with all tables."""
    db = Database("sqlite:///:memory:")
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def todo_repo(database) -> TodoRepository:
    return TodoRepository(database)


@pytest.fixture
def anime_repo(database) -> AnimeRepository:
    return AnimeRepository(database)


@pytest.fixture
def book_repo(database) -> BookRepository:
    return BookRepository(database)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def services() -> Generator[ServiceContainer, None, None]:
    """Service container backed by its own in-memory database."""
    container = init_services(get_test_settings())
    container.database.create_tables()
    yield container
    container.close()


@pytest.fixture
def app(services):
    """Create FastAPI application for testing."""
    application = create_app(services.settings)

    application.dependency_overrides[get_service_container] = lambda: services

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sync_client(app) -> Generator[TestClient, None, None]:
    """Synchronous client for the view layer (an httpx.Client subclass)."""
    with TestClient(app) as tc:
        yield tc


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def sample_books() -> list[dict]:
    """Books to seed; the API cannot create them."""
    return [
        {"title": "Dune", "author": "Frank Herbert", "rating": 4.6, "price": 12.5},
        {"title": "The Left Hand of Darkness", "author": "Ursula K. Le Guin", "rating": 4.4},
        {"title": "Dune Messiah", "author": "Frank Herbert", "rating": 4.1, "price": 9.0},
        {"title": "Kindred", "author": "Octavia E. Butler", "rating": 4.5},
    ]


@pytest.fixture
def seeded_books(services, sample_books) -> list[dict]:
    """Seed books into the application database and return them with ids."""
    services.book_repository.bulk_create(sample_books)
    return [b.to_dict() for b in services.book_repository.list_all()]

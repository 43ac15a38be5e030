"""
Tracklist API

FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from fastapi import Depends, FastAPI
from loguru import logger as app_logger
from sqlalchemy.exc import SQLAlchemyError

from .schemas import HealthResponse
from .routes import todos, anime, books
from .middleware import (
    setup_cors,
    setup_logging,
    setup_exception_handlers,
    LoggingConfig,
    get_cors_config,
)
from .dependencies import (
    get_settings,
    get_service_container,
    init_services,
    ServiceContainer,
    Settings,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Creates missing tables on startup and releases the connection pool
    on shutdown.
    """
    settings = app.state.settings
    logger.info(f"Starting Tracklist in {settings.environment} mode")

    services = get_service_container()
    if services.settings is not settings:
        services = init_services(settings)

    try:
        logger.info("Initializing database...")
        services.database.create_tables()

        logger.info("Tracklist started successfully")

        yield

    finally:
        logger.info("Shutting down Tracklist...")
        services.close()
        logger.info("Shutdown complete")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Tracklist",
        description="Todos, anime watch list and book lookup.",
        version=VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ==========================================================================
    # Middleware (order matters - last added = outermost)
    # ==========================================================================

    setup_exception_handlers(app)

    setup_cors(
        app,
        config=get_cors_config(settings.environment, settings.cors_allowed_origins),
    )

    setup_logging(
        app,
        config=LoggingConfig(enabled=True),
        structured=settings.environment not in ("development", "test"),
    )

    # ==========================================================================
    # Routers
    # ==========================================================================

    api_prefix = "/api"

    app.include_router(todos.router, prefix=api_prefix)
    app.include_router(anime.router, prefix=api_prefix)
    app.include_router(books.router, prefix=api_prefix)

    # ==========================================================================
    # Root Routes
    # ==========================================================================

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Tracklist",
            "version": VERSION,
            "status": "running",
            "resources": [f"{api_prefix}/todos", f"{api_prefix}/anime", f"{api_prefix}/books"],
        }

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    def health_check(
        services: ServiceContainer = Depends(get_service_container),
    ) -> HealthResponse:
        """Report whether the database answers a trivial query."""

        components = {}
        try:
            services.database.ping()
            components["database"] = "healthy"
        except SQLAlchemyError as e:
            app_logger.error(f"Health check failed: {e}")
            components["database"] = "unhealthy"

        return HealthResponse(
            status="healthy" if components["database"] == "healthy" else "degraded",
            version=VERSION,
            components=components,
        )

    return app


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

def main():
    """Run the application using uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "tracklist.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()

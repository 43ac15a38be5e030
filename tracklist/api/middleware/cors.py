"""
CORS Configuration

The view layer may be served from a separate dev server, so the API
answers cross-origin requests according to the environment.
"""

from typing import List, Optional
from dataclasses import dataclass, field, replace
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os


@dataclass
class CORSConfig:
    """CORS configuration settings."""

    allowed_origins: List[str] = field(default_factory=list)

    allowed_methods: List[str] = field(default_factory=lambda: [
        "GET", "POST", "PATCH", "DELETE", "OPTIONS"
    ])

    allowed_headers: List[str] = field(default_factory=lambda: [
        "Accept",
        "Content-Type",
        "X-Request-ID",
    ])

    expose_headers: List[str] = field(default_factory=lambda: [
        "X-Request-ID",
    ])

    # Max age for preflight cache (in seconds)
    max_age: int = 3600

    # Allow all origins (development only!)
    allow_all_origins: bool = False


# Environment-specific configurations
CORS_CONFIGS = {
    "development": CORSConfig(
        allowed_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_all_origins=True,
    ),
    "test": CORSConfig(
        allowed_origins=["http://localhost:3000"],
    ),
    "production": CORSConfig(
        allowed_origins=[],
        max_age=7200,
    ),
}


def get_cors_config(
    environment: Optional[str] = None,
    extra_origins: Optional[str] = None,
) -> CORSConfig:
    """
    Get CORS configuration for the environment.

    Args:
        environment: Environment name. Defaults to TRACKLIST_ENV.
        extra_origins: Comma-separated origins to add. Defaults to
            CORS_ALLOWED_ORIGINS.
    """
    if environment is None:
        environment = os.getenv("TRACKLIST_ENV", "development")
    if extra_origins is None:
        extra_origins = os.getenv("CORS_ALLOWED_ORIGINS", "")

    base = CORS_CONFIGS.get(environment, CORS_CONFIGS["development"])
    # Copy so repeated calls don't grow the shared defaults
    config = replace(base, allowed_origins=list(base.allowed_origins))

    config.allowed_origins.extend(
        origin.strip() for origin in extra_origins.split(",") if origin.strip()
    )

    return config


def setup_cors(app: FastAPI, config: Optional[CORSConfig] = None) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance.
        config: CORS configuration. If None, loads from environment.
    """
    if config is None:
        config = get_cors_config()

    allow_origins = ["*"] if config.allow_all_origins else config.allowed_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=config.allowed_methods,
        allow_headers=config.allowed_headers,
        expose_headers=config.expose_headers,
        max_age=config.max_age,
    )

"""
API middleware components.

Provides cross-cutting concerns for the API:
- Error handling
- CORS configuration
- Request/response logging
"""

from .error_handler import (
    TracklistException,
    ClientFault,
    NotFoundError,
    ServerFault,
    setup_exception_handlers,
    create_error_response,
    persistence_guard,
)

from .cors import (
    CORSConfig,
    get_cors_config,
    setup_cors,
)

from .logging import (
    LoggingConfig,
    StructuredLogFormatter,
    RequestLoggingMiddleware,
    setup_logging,
    get_request_id,
)


__all__ = [
    # Error handling
    "TracklistException",
    "ClientFault",
    "NotFoundError",
    "ServerFault",
    "setup_exception_handlers",
    "create_error_response",
    "persistence_guard",
    # CORS
    "CORSConfig",
    "get_cors_config",
    "setup_cors",
    # Logging
    "LoggingConfig",
    "StructuredLogFormatter",
    "RequestLoggingMiddleware",
    "setup_logging",
    "get_request_id",
]

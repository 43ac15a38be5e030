"""
Unit tests for middleware configuration.
"""

import json
import logging

from tracklist.api.middleware import (
    ClientFault,
    NotFoundError,
    ServerFault,
    get_cors_config,
)
from tracklist.api.middleware.logging import StructuredLogFormatter, request_id_var


class TestCorsConfig:

    def test_development_allows_all(self):
        assert get_cors_config("development", "").allow_all_origins is True

    def test_unknown_environment_falls_back(self):
        assert get_cors_config("staging", "").allow_all_origins is True

    def test_extra_origins_appended(self):
        config = get_cors_config("production", "https://a.example, https://b.example,")

        assert config.allowed_origins == ["https://a.example", "https://b.example"]
        assert config.allow_all_origins is False

    def test_shared_defaults_not_mutated(self):
        get_cors_config("test", "https://a.example")

        assert get_cors_config("test", "").allowed_origins == ["http://localhost:3000"]


class TestStructuredLogFormatter:

    def test_json_output_with_request_id(self):
        record = logging.LogRecord("tracklist.api", logging.INFO, __file__, 1, "GET /api/todos", None, None)
        record.duration_ms = 1.5

        token = request_id_var.set("req-1")
        try:
            data = json.loads(StructuredLogFormatter().format(record))
        finally:
            request_id_var.reset(token)

        assert data["message"] == "GET /api/todos"
        assert data["request_id"] == "req-1"
        assert data["duration_ms"] == 1.5


class TestExceptions:

    def test_status_codes(self):
        assert ClientFault("bad").status_code == 400
        assert NotFoundError("Todo", 3).status_code == 404
        assert ServerFault().status_code == 500

    def test_not_found_detail(self):
        assert NotFoundError("Anime", 7).detail == "No anime with id 7 exists"

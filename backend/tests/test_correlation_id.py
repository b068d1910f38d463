# tests/test_correlation_id.py
"""
Tests for correlation ID middleware, request context and log record stamping.
"""

import json
import logging

from app.utils.context import (
    clear_correlation_id,
    clear_user_id,
    get_correlation_id,
    get_user_id,
    set_correlation_id,
    set_user_id,
)
from app.utils.logging import CorrelationIdFilter, JsonFormatter, NO_CORRELATION_ID


class TestCorrelationIdContext:
    """Tests for request context functions."""

    def test_get_returns_none_when_not_set(self):
        """Should return None when correlation ID is not set."""
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_set_and_get_correlation_id(self):
        """Should set and retrieve correlation ID."""
        set_correlation_id("test-correlation-123")
        assert get_correlation_id() == "test-correlation-123"
        clear_correlation_id()

    def test_set_and_clear_user_id(self):
        set_user_id(42)
        assert get_user_id() == 42
        clear_user_id()
        assert get_user_id() is None


class TestLogRecordStamping:
    """Tests for the logging filter and JSON formatter."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)

    def test_filter_uses_placeholder_outside_request(self):
        clear_correlation_id()
        record = self._record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == NO_CORRELATION_ID
        assert record.user_id is None

    def test_json_formatter_includes_context(self):
        set_correlation_id("trace-1")
        set_user_id(7)
        try:
            record = self._record()
            CorrelationIdFilter().filter(record)
            entry = json.loads(JsonFormatter().format(record))
        finally:
            clear_correlation_id()
            clear_user_id()

        assert entry["correlation_id"] == "trace-1"
        assert entry["user_id"] == 7
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"


class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    def test_generates_correlation_id_when_not_provided(self, client):
        """Should generate correlation ID when not provided in request."""
        response = client.get("/health")

        assert response.status_code == 200
        correlation_id = response.headers["X-Correlation-ID"]
        assert len(correlation_id) == 36  # UUID length
        assert correlation_id.count("-") == 4  # UUID format

    def test_uses_provided_correlation_id(self, client):
        custom_id = "my-custom-trace-id-123"

        response = client.get("/health", headers={"X-Correlation-ID": custom_id})

        assert response.headers["X-Correlation-ID"] == custom_id

    def test_uses_request_id_header_as_fallback(self, client):
        custom_id = "my-request-id-456"

        response = client.get("/health", headers={"X-Request-ID": custom_id})

        assert response.headers["X-Correlation-ID"] == custom_id

    def test_prefers_correlation_id_over_request_id(self, client):
        response = client.get(
            "/health",
            headers={"X-Correlation-ID": "correlation-123", "X-Request-ID": "request-456"},
        )

        assert response.headers["X-Correlation-ID"] == "correlation-123"

    def test_overlong_id_is_replaced(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "x" * 500})

        assert len(response.headers["X-Correlation-ID"]) == 36

    def test_error_responses_include_correlation_id(self, auth_client):
        response = auth_client.get(
            "/values",
            params={"month": 13, "year": 2026},
            headers={"X-Correlation-ID": "failing-request"},
        )

        assert response.status_code == 400
        assert response.headers["X-Correlation-ID"] == "failing-request"

    def test_different_requests_get_different_ids(self, client):
        id1 = client.get("/health").headers["X-Correlation-ID"]
        id2 = client.get("/health").headers["X-Correlation-ID"]

        assert id1 != id2

# backend/app/middleware/correlation.py
"""
Correlation ID middleware for request tracing.

Correlation ID Sources (in order of precedence):
1. X-Correlation-ID header (from the web client or an upstream proxy)
2. X-Request-ID header (alternative header name)
3. Generated UUID if neither header is present

The ID is stored in the request context (picked up by every log record)
and echoed back in the X-Correlation-ID response header.

Usage:
    from fastapi import FastAPI
    from app.middleware import CorrelationIdMiddleware

    app = FastAPI()
    app.add_middleware(CorrelationIdMiddleware)
"""

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.utils.context import clear_correlation_id, clear_user_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Longer incoming IDs are replaced to keep log lines bounded
MAX_CORRELATION_ID_LENGTH = 128


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware that manages correlation IDs for request tracing.

    For each request the ID is taken from the headers or generated, kept in
    context for the lifetime of the request and added to the response.
    Request context is cleared when the request completes.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        correlation_id = self._get_correlation_id(request)
        set_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            clear_correlation_id()
            clear_user_id()

    @staticmethod
    def _get_correlation_id(request: Request) -> str:
        for header in (CORRELATION_ID_HEADER, REQUEST_ID_HEADER):
            value = request.headers.get(header, "").strip()
            if value and len(value) <= MAX_CORRELATION_ID_LENGTH:
                return value
        return str(uuid.uuid4())

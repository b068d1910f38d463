# backend/app/middleware/rate_limit.py
"""
Rate limiting middleware for API protection.

Rate limits are configured in app/services/constants.py per endpoint type:
reads, writes (POST /values), dashboard analytics and health checks.

Key by: Client IP address (forwarded headers only from trusted proxies)
Storage: In-memory (single-instance deployments)
Disabled when ENVIRONMENT=test so the suite can hit endpoints freely.

Usage:
    from app.middleware.rate_limit import limiter, RATE_LIMIT_WRITE

    @router.post("/values")
    @limiter.limit(RATE_LIMIT_WRITE)
    def record_value(request: Request, ...):
        ...
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.services.constants import (
    RATE_LIMIT_ANALYTICS,
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_WRITE,
)

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


def _is_trusted_proxy(request: Request) -> bool:
    """
    Check if the immediate client is a trusted proxy.

    With TRUST_PROXY_HEADERS every client is trusted (only for deployments
    behind a load balancer that overwrites X-Forwarded-For).
    """
    if settings.trust_proxy_headers:
        return True
    return get_remote_address(request) in settings.trusted_proxy_ips


def _get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Forwarded headers are honoured only when the immediate client is a
    trusted proxy, so clients cannot pick their own rate-limit bucket.
    """
    if _is_trusted_proxy(request):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # First entry is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

    return get_remote_address(request)


# =============================================================================
# LIMITER INSTANCE
# =============================================================================

limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=not settings.is_test,
)


# =============================================================================
# RATE LIMIT EXCEEDED HANDLER
# =============================================================================

def _retry_after(exc: RateLimitExceeded) -> int:
    """Seconds until the exceeded window resets."""
    limit = getattr(exc, "limit", None)
    item = getattr(limit, "limit", None)
    if item is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    return int(item.get_expiry())


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """
    Handle rate limit exceeded errors with the standard error envelope.

    Returns 429 Too Many Requests with a Retry-After header.
    """
    retry_after = _retry_after(exc)
    limit_info = str(exc.detail) if exc.detail else "Rate limit exceeded"

    logger.warning(f"Rate limit exceeded for {_get_client_ip(request)}: {limit_info}")

    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitError",
            "message": f"Too many requests. {limit_info}",
            "details": {"retry_after": retry_after},
        },
        headers={"Retry-After": str(retry_after)},
    )


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_WRITE",
    "RATE_LIMIT_ANALYTICS",
    "RATE_LIMIT_HEALTH",
]

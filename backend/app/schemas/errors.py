# backend/app/schemas/errors.py
"""
Pydantic schemas for error responses.

Every error the API returns, from domain exceptions to request validation
and rate limiting, uses the same envelope: {error, message, details}.
Used by the exception handlers in main.py and for OpenAPI documentation.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """
    Standard error response format.

    Example:
        {
            "error": "InvalidPeriodError",
            "message": "Invalid period: month=13, year=2026. ...",
            "details": {"field": "month"}
        }
    """

    error: str = Field(
        ...,
        description="Error type/code (e.g., 'AssetNotFoundError')"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    details: dict | None = Field(
        default=None,
        description="Additional error context (optional)"
    )


class ValidationErrorDetail(BaseModel):
    """Request validation error format (422 responses)."""

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    details: list[dict] = Field(
        ...,
        description="One entry per invalid field: field, message, type"
    )

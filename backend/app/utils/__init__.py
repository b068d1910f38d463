# backend/app/utils/__init__.py
"""
Utility modules for the Wealth Tracker API.

This package contains cross-cutting utilities used throughout the application:
- logging: Logging configuration with correlation ID support
- context: Request-scoped context (correlation ID, user ID)
- periods: Calendar month arithmetic, labels and validation

Usage:
    from app.utils import setup_logging, get_logger
    from app.utils import get_correlation_id, set_correlation_id
    from app.utils.periods import month_index, month_label
"""

from app.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    get_user_id,
    set_user_id,
    clear_user_id,
)
from app.utils.logging import setup_logging, get_logger

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "get_user_id",
    "set_user_id",
    "clear_user_id",
]

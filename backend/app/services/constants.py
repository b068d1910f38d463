# backend/app/services/constants.py
"""
Centralized constants for the Wealth Tracker services.

This module provides a single source of truth for the business constants
used across the balance engine, the routers and the rate limiter.

Usage:
    from app.services.constants import (
        MIN_YEAR,
        MAX_ANALYTICS_MONTHS,
        DISTRIBUTION_PALETTE,
    )
"""

from decimal import Decimal


# =============================================================================
# CALENDAR CONSTANTS
# =============================================================================

# Earliest year a monthly value may be recorded for
MIN_YEAR: int = 2000

# Latest year accepted; larger years would not fit the integer columns
MAX_YEAR: int = 9999

MONTHS_PER_YEAR: int = 12

# English short month names, index 0 = January
# Used for chart labels such as "Mar 26"
MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


# =============================================================================
# ANALYTICS WINDOW
# =============================================================================

# Bounds for the dashboard window (number of months, inclusive)
# Out-of-range requests are clamped, never rejected
MIN_ANALYTICS_MONTHS: int = 1
MAX_ANALYTICS_MONTHS: int = 24

DEFAULT_ANALYTICS_MONTHS: int = 12


# =============================================================================
# DISTRIBUTION COLOURS
# =============================================================================

# Cycled with modulo by the group's first-appearance index
DISTRIBUTION_PALETTE: tuple[str, ...] = (
    "#38bdf8",  # sky
    "#4ade80",  # green
    "#fb7185",  # rose
    "#f59e0b",  # amber
    "#a78bfa",  # violet
    "#f472b6",  # pink
    "#34d399",  # emerald
)

LIQUIDITY_BUCKET_LIQUID: str = "liquid"
LIQUIDITY_BUCKET_ILLIQUID: str = "illiquid"

# Liquidity buckets have fixed colours instead of palette slots
LIQUIDITY_COLORS: dict[str, str] = {
    LIQUIDITY_BUCKET_LIQUID: "#4ade80",
    LIQUIDITY_BUCKET_ILLIQUID: "#fb7185",
}


# =============================================================================
# UTILITY CONSTANTS
# =============================================================================

# Type-safe zero for Decimal comparisons
ZERO: Decimal = Decimal("0")

HUNDRED: Decimal = Decimal("100")


# =============================================================================
# RATE LIMITING CONSTANTS
# =============================================================================
# Limits are expressed as "X per Y" where Y is the time window
# Format follows slowapi/limits syntax: "100/minute", "10/hour", etc.

# Default rate limit for read endpoints (GET requests)
RATE_LIMIT_DEFAULT: str = "100/minute"

# Rate limit for write endpoints (POST /values)
RATE_LIMIT_WRITE: str = "30/minute"

# Dashboard analytics resolve up to 24 months per request
RATE_LIMIT_ANALYTICS: str = "20/minute"

# Rate limit for health check endpoints
RATE_LIMIT_HEALTH: str = "60/minute"

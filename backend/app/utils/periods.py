# backend/app/utils/periods.py
"""
Calendar month helpers for the balance engine.

Months are addressed as (month, year) pairs. For ordering and arithmetic
they are mapped onto a linear month index, ``year * 12 + month``, so that
month 3 of 2024 and month 3 of 2025 never compare equal and stepping
across a year boundary is plain integer arithmetic.

Usage:
    from app.utils.periods import month_index, shift_month, month_label

    month_index(3, 2026)      # 24315
    shift_month(1, 2026, -1)  # (12, 2025)
    month_label(3, 2026)      # "Mar 26"
"""

from datetime import date, datetime, timezone

from app.services.constants import (
    MAX_ANALYTICS_MONTHS,
    MAX_YEAR,
    MIN_ANALYTICS_MONTHS,
    MIN_YEAR,
    MONTH_ABBREVIATIONS,
    MONTHS_PER_YEAR,
)
from app.services.exceptions import InvalidPeriodError


def month_index(month: int, year: int) -> int:
    """Linear month index used for every chronological comparison."""
    return year * MONTHS_PER_YEAR + month


def from_month_index(index: int) -> tuple[int, int]:
    """
    Inverse of month_index.

    Returns:
        (month, year) tuple with month in 1..12
    """
    month = (index - 1) % MONTHS_PER_YEAR + 1
    year = (index - month) // MONTHS_PER_YEAR
    return month, year


def shift_month(month: int, year: int, delta: int) -> tuple[int, int]:
    """
    Move a (month, year) pair by ``delta`` months, borrowing across years.

    Example:
        >>> shift_month(1, 2026, -1)
        (12, 2025)
        >>> shift_month(11, 2025, 3)
        (2, 2026)
    """
    return from_month_index(month_index(month, year) + delta)


def month_label(month: int, year: int) -> str:
    """Short chart label: English month abbreviation plus two-digit year ("Mar 26")."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"


def is_valid_period(month: int, year: int) -> bool:
    return 1 <= month <= MONTHS_PER_YEAR and MIN_YEAR <= year <= MAX_YEAR


def validate_period(month: int, year: int) -> None:
    """
    Reject periods outside the supported calendar.

    Raises:
        InvalidPeriodError: If month is not 1..12 or year is outside 2000..9999
    """
    if not is_valid_period(month, year):
        raise InvalidPeriodError(month, year)


def clamp_window(months: int) -> int:
    """Clamp an analytics window size into [1, 24]. Never rejects."""
    return max(MIN_ANALYTICS_MONTHS, min(months, MAX_ANALYTICS_MONTHS))


def current_month_year(today: date | None = None) -> tuple[int, int]:
    """
    Month and year of ``today`` (UTC today when omitted).

    Returns:
        (month, year) tuple
    """
    if today is None:
        today = datetime.now(timezone.utc).date()
    return today.month, today.year

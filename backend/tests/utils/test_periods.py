# tests/utils/test_periods.py
"""
Tests for calendar month helpers and the Period value object.
"""

from datetime import date

import pytest

from app.services.balance.types import Period, months_ending_at
from app.services.exceptions import InvalidPeriodError
from app.utils.periods import (
    clamp_window,
    current_month_year,
    from_month_index,
    is_valid_period,
    month_index,
    month_label,
    shift_month,
    validate_period,
)


class TestMonthIndex:

    @pytest.mark.parametrize("month,year", [(1, 2000), (12, 2025), (3, 2026)])
    def test_inverse(self, month, year):
        assert from_month_index(month_index(month, year)) == (month, year)

    def test_same_month_different_year_differs(self):
        assert month_index(3, 2024) != month_index(3, 2025)

    def test_december_precedes_january(self):
        assert month_index(12, 2025) + 1 == month_index(1, 2026)


class TestShiftMonth:

    @pytest.mark.parametrize("start,delta,expected", [
        ((1, 2026), -1, (12, 2025)),
        ((11, 2025), 3, (2, 2026)),
        ((6, 2025), 0, (6, 2025)),
        ((3, 2026), -24, (3, 2024)),
    ])
    def test_shift(self, start, delta, expected):
        assert shift_month(*start, delta) == expected


class TestMonthLabel:

    def test_label(self):
        assert month_label(3, 2026) == "Mar 26"

    def test_two_digit_year_is_zero_padded(self):
        assert month_label(12, 2005) == "Dec 05"


class TestValidatePeriod:

    @pytest.mark.parametrize("month,year", [(1, 2000), (12, 2099), (12, 9999)])
    def test_valid(self, month, year):
        assert is_valid_period(month, year)
        validate_period(month, year)

    @pytest.mark.parametrize("month,year,field", [
        (0, 2026, "month"),
        (13, 2026, "month"),
        (6, 1999, "year"),
        (6, 10000, "year"),
        (6, 10**20, "year"),
    ])
    def test_invalid(self, month, year, field):
        with pytest.raises(InvalidPeriodError) as exc_info:
            validate_period(month, year)

        assert exc_info.value.field == field


class TestClampWindow:

    @pytest.mark.parametrize("months,expected", [(-5, 1), (0, 1), (1, 1), (12, 12), (24, 24), (100, 24)])
    def test_clamp(self, months, expected):
        assert clamp_window(months) == expected


def test_current_month_year_from_date():
    assert current_month_year(date(2026, 3, 15)) == (3, 2026)


def test_current_month_year_defaults_to_today():
    month, year = current_month_year()

    assert 1 <= month <= 12
    assert year >= 2000


class TestPeriod:

    def test_previous_of_january(self):
        assert Period(1, 2026).previous() == Period(12, 2025)

    def test_ordering_across_years(self):
        assert Period(12, 2025) < Period(1, 2026)
        assert Period(3, 2026) <= Period(3, 2026)

    def test_label(self):
        assert Period(3, 2026).label == "Mar 26"

    def test_months_ending_at(self):
        assert months_ending_at(Period(2, 2026), 3) == [
            Period(12, 2025),
            Period(1, 2026),
            Period(2, 2026),
        ]

    def test_single_month_window(self):
        assert months_ending_at(Period(2, 2026), 1) == [Period(2, 2026)]

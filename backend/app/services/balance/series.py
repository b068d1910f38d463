# backend/app/services/balance/series.py
"""
Time-series aggregator: monthly totals and period comparisons.

For a window of N consecutive months ending at the current month the
aggregator produces one MonthlyTotal per month (oldest first) and derives:

- monthly change: current vs. the preceding month of the window
- YTD change: current vs. January of the current year, if in the window
- yearly change: current vs. the same month last year, if in the window
- average monthly growth: simple mean of month-over-month percentages
  over consecutive pairs whose earlier total is positive
- monthly contributions: first differences of the totals

Every comparison whose base month is missing or has a non-positive total
reports 0 for both the change and the percentage.

Note:
    Average growth is an arithmetic mean of percentages, not a compounded
    rate. Users see this number, so it is kept as is.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from app.services.constants import HUNDRED, ZERO
from app.services.balance.resolver import resolve_window
from app.services.balance.types import (
    AssetInfo,
    EffectiveValue,
    MonthlyContribution,
    MonthlyTotal,
    MonthlyValueRecord,
    Period,
    SeriesResult,
    months_ending_at,
)

logger = logging.getLogger(__name__)


def _compare(current: Decimal, base: MonthlyTotal | None) -> tuple[Decimal, Decimal]:
    """(change, change_percent) against ``base``; zeros when there is no usable base."""
    if base is None or base.total <= ZERO:
        return ZERO, ZERO
    change = current - base.total
    return change, change / base.total * HUNDRED


class TimeSeriesAggregator:
    """
    Builds the dashboard time series from a pre-fetched value history.

    All months are resolved from the single history passed in; nothing
    here performs I/O.
    """

    def build(
            self,
            hierarchy: list[AssetInfo],
            values: list[MonthlyValueRecord],
            current: Period,
            window: int,
    ) -> SeriesResult:
        """
        Aggregate ``window`` months ending at ``current``.

        Args:
            hierarchy: Assets of the user, in display order
            values: Value history covering every record up to ``current``
            current: Last (most recent) month of the window
            window: Number of months; callers clamp it to 1..24

        Returns:
            SeriesResult with totals, comparisons and contributions
        """
        periods = months_ending_at(current, window)
        resolved = resolve_window([a.id for a in hierarchy], values, periods)

        monthly_totals = [
            self._monthly_total(hierarchy, period, effective)
            for period, effective in zip(periods, resolved)
        ]
        by_period = {mt.period: mt for mt in monthly_totals}
        current_total = monthly_totals[-1].total

        previous = monthly_totals[-2] if len(monthly_totals) > 1 else None
        monthly_change, monthly_change_percent = _compare(current_total, previous)

        ytd_change, ytd_change_percent = _compare(
            current_total, by_period.get(Period(1, current.year))
        )
        yearly_change, yearly_change_percent = _compare(
            current_total, by_period.get(Period(current.month, current.year - 1))
        )

        result = SeriesResult(
            monthly_totals=monthly_totals,
            monthly_change=monthly_change,
            monthly_change_percent=monthly_change_percent,
            ytd_change=ytd_change,
            ytd_change_percent=ytd_change_percent,
            yearly_change=yearly_change,
            yearly_change_percent=yearly_change_percent,
            avg_monthly_growth=self._average_growth(monthly_totals),
            monthly_contributions=self._contributions(monthly_totals),
            effective_values=resolved,
        )

        logger.debug(
            f"Built series of {len(monthly_totals)} months ending {current} "
            f"for {len(hierarchy)} assets"
        )
        return result

    @staticmethod
    def _monthly_total(
            hierarchy: list[AssetInfo],
            period: Period,
            effective: dict[str, EffectiveValue],
    ) -> MonthlyTotal:
        total = ZERO
        by_class: dict[str, Decimal] = {}
        for asset in hierarchy:
            ev = effective.get(asset.id)
            amount = ev.amount if ev is not None else ZERO
            total += amount
            # Classes with no contributing asset are left out, not zeroed
            if amount != ZERO:
                by_class[asset.asset_class_name] = by_class.get(asset.asset_class_name, ZERO) + amount
        return MonthlyTotal(period=period, total=total, by_class=by_class)

    @staticmethod
    def _average_growth(monthly_totals: list[MonthlyTotal]) -> Decimal:
        rates = [
            (curr.total - prev.total) / prev.total * HUNDRED
            for prev, curr in zip(monthly_totals, monthly_totals[1:])
            if prev.total > ZERO
        ]
        if not rates:
            return ZERO
        return sum(rates, ZERO) / Decimal(len(rates))

    @staticmethod
    def _contributions(monthly_totals: list[MonthlyTotal]) -> list[MonthlyContribution]:
        return [
            MonthlyContribution(label=curr.label, contribution=curr.total - prev.total)
            for prev, curr in zip(monthly_totals, monthly_totals[1:])
        ]

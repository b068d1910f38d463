# backend/app/services/balance/analyzer.py
"""
Distribution & performance analyzer.

From the current and previous month's snapshots computes:

- class / currency / liquidity distributions (groups with a positive total)
- per-asset month-over-month performance
- top asset, best and worst growth
- fill rate (share of assets with a positive value)

Groups keep the order in which they first appear in the hierarchy, and
that order picks each group's palette colour. Ties for top/best/worst go
to the first asset encountered.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from app.services.constants import (
    DISTRIBUTION_PALETTE,
    HUNDRED,
    LIQUIDITY_BUCKET_ILLIQUID,
    LIQUIDITY_BUCKET_LIQUID,
    LIQUIDITY_COLORS,
    ZERO,
)
from app.services.balance.types import (
    AnalysisResult,
    AssetInfo,
    AssetPerformance,
    DistributionEntry,
    Snapshot,
)


def share_of(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == ZERO:
        return ZERO
    return part / whole * HUNDRED


def group_and_sum(
        hierarchy: list[AssetInfo],
        amounts: dict[str, Decimal],
        key: Callable[[AssetInfo], str],
) -> dict[str, Decimal]:
    """
    Sum amounts per group, keeping first-appearance order.

    Only positive amounts are added; groups that end up with a
    non-positive total are dropped.
    """
    totals: dict[str, Decimal] = {}
    for asset in hierarchy:
        amount = amounts.get(asset.id, ZERO)
        if amount > ZERO:
            group = key(asset)
            totals[group] = totals.get(group, ZERO) + amount
    return {name: total for name, total in totals.items() if total > ZERO}


def liquidity_key(asset: AssetInfo) -> str:
    return LIQUIDITY_BUCKET_LIQUID if asset.is_liquid else LIQUIDITY_BUCKET_ILLIQUID


def liquidity_totals(hierarchy: list[AssetInfo], amounts: dict[str, Decimal]) -> tuple[Decimal, Decimal]:
    """Raw (liquid, illiquid) sums over all assets, including non-positive values."""
    liquid = ZERO
    illiquid = ZERO
    for asset in hierarchy:
        amount = amounts.get(asset.id, ZERO)
        if asset.is_liquid:
            liquid += amount
        else:
            illiquid += amount
    return liquid, illiquid


class DistributionAnalyzer:
    """
    Derives distributions and performance figures from two snapshots.

    Stateless; one instance may be shared across requests.
    """

    def analyze(
            self,
            hierarchy: list[AssetInfo],
            current: Snapshot,
            previous: Snapshot,
    ) -> AnalysisResult:
        """
        Analyze the current month against the previous one.

        Args:
            hierarchy: Assets of the user, in display order
            current: Snapshot for the current month
            previous: Snapshot for the preceding month

        Returns:
            AnalysisResult; empty distributions and None performers when
            there is nothing to report
        """
        current_amounts = current.amounts()
        previous_amounts = previous.amounts()
        overall = current.total_balance

        performance = self._performance(hierarchy, current_amounts, previous_amounts)
        growth_candidates = [p for p in performance if p.previous > ZERO]

        return AnalysisResult(
            class_distribution=self._palette_distribution(
                group_and_sum(hierarchy, current_amounts, lambda a: a.asset_class_name), overall
            ),
            currency_distribution=self._palette_distribution(
                group_and_sum(hierarchy, current_amounts, lambda a: a.currency), overall
            ),
            liquidity_distribution=self._liquidity_distribution(hierarchy, current_amounts, overall),
            asset_performance=performance,
            # max()/min() return the first of equal elements
            top_asset=max(performance, key=lambda p: p.current, default=None),
            best_growth=max(growth_candidates, key=lambda p: p.change_percent, default=None),
            worst_growth=min(growth_candidates, key=lambda p: p.change_percent, default=None),
            fill_rate=self._fill_rate(hierarchy, current_amounts),
        )

    @staticmethod
    def _palette_distribution(
            totals: dict[str, Decimal],
            overall: Decimal,
    ) -> list[DistributionEntry]:
        return [
            DistributionEntry(
                name=name,
                value=total,
                percent=share_of(total, overall),
                color=DISTRIBUTION_PALETTE[i % len(DISTRIBUTION_PALETTE)],
            )
            for i, (name, total) in enumerate(totals.items())
        ]

    @staticmethod
    def _liquidity_distribution(
            hierarchy: list[AssetInfo],
            amounts: dict[str, Decimal],
            overall: Decimal,
    ) -> list[DistributionEntry]:
        liquid, illiquid = liquidity_totals(hierarchy, amounts)
        buckets = (
            (LIQUIDITY_BUCKET_LIQUID, liquid),
            (LIQUIDITY_BUCKET_ILLIQUID, illiquid),
        )
        return [
            DistributionEntry(
                name=name,
                value=total,
                percent=share_of(total, overall),
                color=LIQUIDITY_COLORS[name],
            )
            for name, total in buckets
            if total > ZERO
        ]

    @staticmethod
    def _performance(
            hierarchy: list[AssetInfo],
            current_amounts: dict[str, Decimal],
            previous_amounts: dict[str, Decimal],
    ) -> list[AssetPerformance]:
        performance = []
        for asset in hierarchy:
            current = current_amounts.get(asset.id, ZERO)
            previous = previous_amounts.get(asset.id, ZERO)
            # Zero in both months: not part of the performance list at all
            if current <= ZERO and previous <= ZERO:
                continue
            change = current - previous
            performance.append(
                AssetPerformance(
                    asset_id=asset.id,
                    asset_name=asset.name,
                    current=current,
                    previous=previous,
                    change=change,
                    change_percent=change / previous * HUNDRED if previous > ZERO else ZERO,
                )
            )
        return performance

    @staticmethod
    def _fill_rate(hierarchy: list[AssetInfo], amounts: dict[str, Decimal]) -> Decimal:
        if not hierarchy:
            return ZERO
        filled = sum(1 for asset in hierarchy if amounts.get(asset.id, ZERO) > ZERO)
        return share_of(Decimal(filled), Decimal(len(hierarchy)))

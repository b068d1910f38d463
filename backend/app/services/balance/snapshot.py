# backend/app/services/balance/snapshot.py
"""
Snapshot builder: one month's effective values, total and change.

The snapshot contains exactly the assets present in the hierarchy.
Effective values for assets outside it (values whose asset has been
removed upstream) are ignored.
"""

from __future__ import annotations

from decimal import Decimal

from app.services.constants import HUNDRED, ZERO
from app.services.balance.types import (
    AssetInfo,
    BalanceChange,
    EffectiveValue,
    Period,
    Snapshot,
)


def total_of(hierarchy: list[AssetInfo], effective: dict[str, EffectiveValue]) -> Decimal:
    """Sum of effective amounts over hierarchy assets; missing assets count as 0."""
    total = ZERO
    for asset in hierarchy:
        ev = effective.get(asset.id)
        if ev is not None:
            total += ev.amount
    return total


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """(current - previous) / previous * 100, or 0 when previous is 0."""
    if previous == ZERO:
        return ZERO
    return (current - previous) / previous * HUNDRED


class SnapshotBuilder:
    """
    Builds a Snapshot from resolved effective values.

    Stateless; one instance may be shared across requests.
    """

    def build(
            self,
            hierarchy: list[AssetInfo],
            period: Period,
            effective: dict[str, EffectiveValue],
            previous_effective: dict[str, EffectiveValue],
            currency: str,
    ) -> Snapshot:
        """
        Build the snapshot for ``period``.

        Args:
            hierarchy: Assets of the user, in display order
            period: Target month
            effective: Effective values for the target month
            previous_effective: Effective values for the preceding month
            currency: Label for the total

        Returns:
            Snapshot with one value per hierarchy asset
        """
        values = [
            effective.get(asset.id) or EffectiveValue(asset_id=asset.id, period=period, value=ZERO)
            for asset in hierarchy
        ]

        total = sum((ev.amount for ev in values), ZERO)
        previous_total = total_of(hierarchy, previous_effective)
        absolute = total - previous_total

        return Snapshot(
            period=period,
            currency=currency,
            total_balance=total,
            change_from_previous=BalanceChange(
                absolute=absolute,
                percentage=percent_change(total, previous_total),
            ),
            values=values,
        )

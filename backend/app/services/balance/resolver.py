# backend/app/services/balance/resolver.py
"""
Inheritance resolver: effective value per asset for a target month.

A month without a recorded value inherits the most recent earlier value
for that asset. Values recorded after the target month never inherit
backward, and an asset with nothing at or before the target is zero.

Two modes are provided:

- resolve(): one target month, from a value history (any order).
- LastKnownValues + resolve_window(): many consecutive months using the
  Rolling State pattern. Months are visited oldest first and a running
  "last known value per asset" accumulator is updated whenever a month
  has an exact record. Produces the same result as calling resolve()
  once per month, in O(assets x months).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from app.services.constants import ZERO
from app.services.balance.types import EffectiveValue, MonthlyValueRecord, Period

logger = logging.getLogger(__name__)


def _missing(asset_id: str, period: Period) -> EffectiveValue:
    return EffectiveValue(asset_id=asset_id, period=period, value=ZERO)


def resolve(
        asset_ids: Iterable[str],
        values: Iterable[MonthlyValueRecord],
        target: Period,
) -> dict[str, EffectiveValue]:
    """
    Resolve effective values for a single target month.

    Args:
        asset_ids: Assets to resolve; values for other assets are ignored
        values: Value history (newest first from the store, but any order works)
        target: Month to resolve

    Returns:
        Mapping asset_id -> EffectiveValue, one entry per requested asset
    """
    wanted = set(asset_ids)
    target_index = target.index

    # Latest record at or before the target, per asset
    latest: dict[str, MonthlyValueRecord] = {}
    for record in values:
        if record.asset_id not in wanted:
            continue
        record_index = record.period.index
        if record_index > target_index:
            continue
        current = latest.get(record.asset_id)
        if current is None or record_index > current.period.index:
            latest[record.asset_id] = record

    resolved: dict[str, EffectiveValue] = {}
    for asset_id in wanted:
        record = latest.get(asset_id)
        if record is None:
            resolved[asset_id] = _missing(asset_id, target)
        elif record.period.index == target_index:
            resolved[asset_id] = EffectiveValue(
                asset_id=asset_id,
                period=target,
                value=record.value,
            )
        else:
            resolved[asset_id] = EffectiveValue(
                asset_id=asset_id,
                period=target,
                value=record.value,
                is_inherited=True,
                inherited_from=record.period,
            )
    return resolved


class LastKnownValues:
    """
    Running state for chronological multi-month resolution.

    Each aggregation request creates its own accumulator and folds it over
    the window's months in ascending order. Exact records observed for a
    month replace the asset's last known value; every other asset keeps
    (inherits) whatever was last seen.
    """

    def __init__(self, asset_ids: Iterable[str]) -> None:
        self._asset_ids = list(dict.fromkeys(asset_ids))
        self._known = set(self._asset_ids)
        self._last: dict[str, MonthlyValueRecord] = {}

    def seed(self, records: Iterable[MonthlyValueRecord]) -> None:
        """
        Prime the state with records from before the window.

        Only the newest record per asset is kept.
        """
        for record in records:
            if record.asset_id not in self._known:
                continue
            current = self._last.get(record.asset_id)
            if current is None or record.period.index > current.period.index:
                self._last[record.asset_id] = record

    def advance(
            self,
            period: Period,
            exact: dict[str, MonthlyValueRecord],
    ) -> dict[str, EffectiveValue]:
        """
        Step the state to ``period`` and return that month's effective values.

        Args:
            period: Month being visited (must not precede the previous call)
            exact: Records whose (month, year) equals ``period``, by asset_id
        """
        resolved: dict[str, EffectiveValue] = {}
        for asset_id in self._asset_ids:
            record = exact.get(asset_id)
            if record is not None:
                self._last[asset_id] = record
                resolved[asset_id] = EffectiveValue(
                    asset_id=asset_id,
                    period=period,
                    value=record.value,
                )
                continue

            previous = self._last.get(asset_id)
            if previous is None:
                resolved[asset_id] = _missing(asset_id, period)
            else:
                resolved[asset_id] = EffectiveValue(
                    asset_id=asset_id,
                    period=period,
                    value=previous.value,
                    is_inherited=True,
                    inherited_from=previous.period,
                )
        return resolved


def resolve_window(
        asset_ids: Iterable[str],
        values: Iterable[MonthlyValueRecord],
        periods: list[Period],
) -> list[dict[str, EffectiveValue]]:
    """
    Resolve consecutive months in one chronological pass.

    Records before the first period seed the accumulator, records inside
    the window are applied as their month is reached, and records after
    the last period are ignored.

    Args:
        asset_ids: Assets to resolve
        values: Value history covering at least everything up to periods[-1]
        periods: Months to resolve, oldest first

    Returns:
        One mapping asset_id -> EffectiveValue per period, in the same order
    """
    if not periods:
        return []

    accumulator = LastKnownValues(asset_ids)
    first_index = periods[0].index
    last_index = periods[-1].index

    before: list[MonthlyValueRecord] = []
    by_month: dict[int, dict[str, MonthlyValueRecord]] = defaultdict(dict)
    for record in values:
        record_index = record.period.index
        if record_index < first_index:
            before.append(record)
        elif record_index <= last_index:
            by_month[record_index][record.asset_id] = record

    accumulator.seed(before)

    logger.debug(
        f"Resolving {len(periods)} months: {len(before)} seed records, "
        f"{sum(len(v) for v in by_month.values())} in-window records"
    )

    return [accumulator.advance(period, by_month.get(period.index, {})) for period in periods]

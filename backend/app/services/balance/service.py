# backend/app/services/balance/service.py
"""
Balance Service - Main orchestrator for monthly balances.

This is the single entry point for balance operations:
- get_snapshot(): Effective values and total balance for one month
- record_value(): Insert or overwrite one asset's value for one month
- get_dashboard_analytics(): Time series, distributions and performers

Design Principles:
- Dependency Injection: hierarchy and value store injected via constructor
- One range query per request; every month is resolved in memory
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Composable: resolver, builder, aggregator and analyzer each do one thing

Usage:
    from app.services.balance import BalanceService, Period

    service = BalanceService()

    snapshot = service.get_snapshot(db, user, Period(3, 2026))
    analytics = service.get_dashboard_analytics(db, user, Period(3, 2026), months=12)
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.config import settings
from app.models import MonthlyValue, User
from app.services.balance.analyzer import DistributionAnalyzer, liquidity_totals
from app.services.balance.resolver import resolve
from app.services.balance.series import TimeSeriesAggregator
from app.services.balance.snapshot import SnapshotBuilder
from app.services.balance.types import (
    AnalysisResult,
    DashboardAnalytics,
    MonthlyTotal,
    Period,
    SeriesResult,
    Snapshot,
    months_ending_at,
)
from app.services.constants import ZERO
from app.services.exceptions import AssetNotFoundError, InvalidValueError
from app.utils.periods import clamp_window, validate_period

if TYPE_CHECKING:
    from app.services.protocols import AssetHierarchyProtocol, ValueStoreProtocol

logger = logging.getLogger(__name__)

# Matches the Numeric(18, 2) column
_VALUE_QUANTUM = Decimal("0.01")
_VALUE_LIMIT = Decimal("1e16")


def parse_value(raw: object) -> Decimal:
    """
    Parse a submitted value strictly.

    Accepts decimal strings and numbers; rounds to cents.

    Raises:
        InvalidValueError: If the value is not a finite number or does not
            fit the storage column
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidValueError(raw)
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        raise InvalidValueError(raw)
    if not amount.is_finite() or abs(amount) >= _VALUE_LIMIT:
        raise InvalidValueError(raw)
    return amount.quantize(_VALUE_QUANTUM, rounding=ROUND_HALF_UP)


class BalanceService:
    """
    Main service for balance operations.

    Attributes:
        _hierarchy: Asset tree reader
        _values: Monthly value store
        _builder: Snapshot builder
        _aggregator: Time-series aggregator
        _analyzer: Distribution & performance analyzer
    """

    def __init__(
            self,
            hierarchy: AssetHierarchyProtocol | None = None,
            values: ValueStoreProtocol | None = None,
    ) -> None:
        """
        Initialize the balance service.

        Args:
            hierarchy: Asset hierarchy reader. If None, uses SQLAlchemy.
            values: Value store. If None, uses SQLAlchemy.
        """
        # Lazy import to avoid circular dependencies
        if hierarchy is None or values is None:
            from app.services.repositories import SqlAlchemyAssetHierarchy, SqlAlchemyValueStore
            hierarchy = hierarchy or SqlAlchemyAssetHierarchy()
            values = values or SqlAlchemyValueStore()

        self._hierarchy: AssetHierarchyProtocol = hierarchy
        self._values: ValueStoreProtocol = values

        self._builder = SnapshotBuilder()
        self._aggregator = TimeSeriesAggregator()
        self._analyzer = DistributionAnalyzer()

        logger.info("BalanceService initialized")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def get_snapshot(self, db: Session, user: User, period: Period) -> Snapshot:
        """
        Build the snapshot for one month.

        Args:
            db: Database session
            user: Owner of the assets
            period: Target month

        Returns:
            Snapshot with one effective value per asset, the total and the
            change against the preceding month

        Raises:
            InvalidPeriodError: If the period is outside the supported calendar
        """
        validate_period(period.month, period.year)

        hierarchy = self._hierarchy.fetch_hierarchy(db, user.id)
        asset_ids = [asset.id for asset in hierarchy]
        history = self._values.fetch_value_history(db, user.id, asset_ids, period)

        snapshot = self._builder.build(
            hierarchy=hierarchy,
            period=period,
            effective=resolve(asset_ids, history, period),
            previous_effective=resolve(asset_ids, history, period.previous()),
            currency=self._currency(user),
        )

        logger.debug(
            f"Snapshot {period} for user {user.id}: {len(asset_ids)} assets, "
            f"total={snapshot.total_balance}"
        )
        return snapshot

    def record_value(
            self,
            db: Session,
            user: User,
            asset_id: str,
            period: Period,
            value: object,
    ) -> MonthlyValue:
        """
        Insert or overwrite an asset's value for one month.

        Raises:
            InvalidPeriodError: If the period is outside the supported calendar
            AssetNotFoundError: If the asset does not exist or is not the user's
            InvalidValueError: If the value is not a number
        """
        validate_period(period.month, period.year)

        if not self._hierarchy.owns_asset(db, user.id, asset_id):
            logger.warning(f"User {user.id} tried to record a value for unknown asset {asset_id}")
            raise AssetNotFoundError(asset_id)

        amount = parse_value(value)
        row = self._values.upsert(db, user.id, asset_id, period, amount)

        logger.info(f"Recorded value for asset {asset_id} at {period} (user {user.id})")
        return row

    def get_dashboard_analytics(
            self,
            db: Session,
            user: User,
            current: Period,
            months: int,
    ) -> DashboardAnalytics:
        """
        Compute the dashboard for a window of months ending at ``current``.

        Args:
            db: Database session
            user: Owner of the assets
            current: Most recent month of the window
            months: Window size; clamped to 1..24

        Returns:
            DashboardAnalytics; zero-valued when the user has no assets
        """
        window = clamp_window(months)
        hierarchy = self._hierarchy.fetch_hierarchy(db, user.id)

        if not hierarchy:
            logger.debug(f"User {user.id} has no assets, returning empty analytics")
            return self._empty_analytics(current, window)

        asset_ids = [asset.id for asset in hierarchy]
        history = self._values.fetch_value_history(db, user.id, asset_ids, current)

        series = self._aggregator.build(hierarchy, history, current, window)

        current_effective = series.effective_values[-1]
        if window > 1:
            previous_effective = series.effective_values[-2]
        else:
            previous_effective = resolve(asset_ids, history, current.previous())

        currency = self._currency(user)
        current_snapshot = self._builder.build(
            hierarchy, current, current_effective, previous_effective, currency
        )
        previous_snapshot = self._builder.build(
            hierarchy, current.previous(), previous_effective, {}, currency
        )
        analysis = self._analyzer.analyze(hierarchy, current_snapshot, previous_snapshot)

        amounts = current_snapshot.amounts()
        liquid_total, illiquid_total = liquidity_totals(hierarchy, amounts)

        logger.info(
            f"Computed {window}-month analytics ending {current} for user {user.id} "
            f"({len(hierarchy)} assets, {len(history)} value records)"
        )

        return DashboardAnalytics(
            series=series,
            analysis=analysis,
            current_total=series.current_total,
            liquid_total=liquid_total,
            illiquid_total=illiquid_total,
            total_assets=len(hierarchy),
            assets_with_values=sum(1 for amount in amounts.values() if amount > ZERO),
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _currency(user: User) -> str:
        return user.default_currency or settings.default_currency

    @staticmethod
    def _empty_analytics(current: Period, window: int) -> DashboardAnalytics:
        monthly_totals = [
            MonthlyTotal(period=period, total=ZERO, by_class={})
            for period in months_ending_at(current, window)
        ]
        return DashboardAnalytics(
            series=SeriesResult(monthly_totals=monthly_totals),
            analysis=AnalysisResult(),
        )

# backend/app/services/balance/__init__.py
"""
Balance engine: monthly value inheritance and balance aggregation.

Components (leaf-first):
- resolver: effective value per asset per month (forward-fill)
- snapshot: one month's values, total and change
- series: N-month totals and period comparisons
- analyzer: distributions and per-asset performance
- service: BalanceService, fetches data and runs the above

Usage:
    from app.services.balance import BalanceService, Period
"""

from app.services.balance.analyzer import DistributionAnalyzer, group_and_sum
from app.services.balance.resolver import LastKnownValues, resolve, resolve_window
from app.services.balance.series import TimeSeriesAggregator
from app.services.balance.service import BalanceService, parse_value
from app.services.balance.snapshot import SnapshotBuilder
from app.services.balance.types import (
    AnalysisResult,
    AssetInfo,
    AssetPerformance,
    BalanceChange,
    DashboardAnalytics,
    DistributionEntry,
    EffectiveValue,
    MonthlyContribution,
    MonthlyTotal,
    MonthlyValueRecord,
    Period,
    SeriesResult,
    Snapshot,
    months_ending_at,
)

__all__ = [
    # Service
    "BalanceService",
    "parse_value",
    # Components
    "resolve",
    "resolve_window",
    "LastKnownValues",
    "SnapshotBuilder",
    "TimeSeriesAggregator",
    "DistributionAnalyzer",
    "group_and_sum",
    # Types
    "Period",
    "months_ending_at",
    "AssetInfo",
    "MonthlyValueRecord",
    "EffectiveValue",
    "BalanceChange",
    "Snapshot",
    "MonthlyTotal",
    "MonthlyContribution",
    "SeriesResult",
    "DistributionEntry",
    "AssetPerformance",
    "AnalysisResult",
    "DashboardAnalytics",
]

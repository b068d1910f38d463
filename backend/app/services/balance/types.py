# backend/app/services/balance/types.py
"""
Internal data types for the balance engine.

These dataclasses are used internally by the resolver, builders and
analyzer. They are NOT Pydantic schemas - those are defined in
app/schemas/values.py and app/schemas/analytics.py for API serialization.

Design Principles:
- Immutable value objects (frozen=True) for inputs and periods
- Use Decimal for ALL monetary values (never float)
- Absent data is represented by zero or None, never by an exception

Type Hierarchy:
    Period              - One calendar month
    AssetInfo           - Leaf asset of the hierarchy with its grouping keys
    MonthlyValueRecord  - One recorded value (input from the value store)
    EffectiveValue      - Value used for an asset in a month, with provenance
    BalanceChange       - Absolute + percentage delta between two totals
    Snapshot            - All effective values + total for one month
    MonthlyTotal        - Total and per-class sub-totals for one month
    MonthlyContribution - First difference between consecutive totals
    SeriesResult        - Time-series aggregation output
    DistributionEntry   - One group of a distribution chart
    AssetPerformance    - Month-over-month delta for one asset
    AnalysisResult      - Distribution & performance output
    DashboardAnalytics  - Combined payload for the dashboard
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from app.services.constants import ZERO
from app.utils.periods import from_month_index, month_index, month_label


def parse_amount(raw: Decimal | str | int | float | None) -> Decimal:
    """
    Parse a stored or transported value into a Decimal.

    Missing, unparseable and non-finite values count as zero.
    """
    if raw is None:
        return ZERO
    if isinstance(raw, Decimal):
        amount = raw
    else:
        try:
            amount = Decimal(str(raw).strip())
        except InvalidOperation:
            return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


# =============================================================================
# CALENDAR
# =============================================================================

@dataclass(frozen=True)
class Period:
    """
    One calendar month.

    Ordering and arithmetic go through the linear month index so that
    periods in different years never collide.
    """

    month: int
    year: int

    @property
    def index(self) -> int:
        return month_index(self.month, self.year)

    @property
    def label(self) -> str:
        return month_label(self.month, self.year)

    @classmethod
    def from_index(cls, index: int) -> Period:
        month, year = from_month_index(index)
        return cls(month=month, year=year)

    def shift(self, months: int) -> Period:
        return Period.from_index(self.index + months)

    def previous(self) -> Period:
        """Preceding month: (month-1, year), or (12, year-1) for January."""
        return self.shift(-1)

    def __lt__(self, other: Period) -> bool:
        return self.index < other.index

    def __le__(self, other: Period) -> bool:
        return self.index <= other.index

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"


def months_ending_at(end: Period, count: int) -> list[Period]:
    """
    ``count`` consecutive months ending at ``end``, oldest first.

    Example:
        >>> months_ending_at(Period(2, 2026), 3)
        [Period(month=12, year=2025), Period(month=1, year=2026), Period(month=2, year=2026)]
    """
    return [end.shift(offset) for offset in range(-(count - 1), 1)]


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class AssetInfo:
    """
    Leaf asset of a user's hierarchy, flattened for aggregation.

    Attributes:
        id: Asset identifier
        name: Display name
        is_liquid: Liquidity flag (drives the liquidity distribution)
        currency: Asset's own currency code (label only, never converted)
        asset_class_name: Name of the owning asset class
        display_order: Position within the provider
    """

    id: str
    name: str
    is_liquid: bool
    currency: str
    asset_class_name: str
    display_order: int = 0


@dataclass(frozen=True)
class MonthlyValueRecord:
    """One recorded value of one asset for one month."""

    asset_id: str
    month: int
    year: int
    value: Decimal | str

    @property
    def period(self) -> Period:
        return Period(self.month, self.year)

    @property
    def amount(self) -> Decimal:
        return parse_amount(self.value)


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class EffectiveValue:
    """
    Value used for an asset in a given month.

    is_inherited is True only when the value was forward-filled from an
    earlier month (inherited_from names that month). An exact match and
    a missing value both report is_inherited=False; the latter carries
    a value of zero.
    """

    asset_id: str
    period: Period
    value: Decimal | str
    is_inherited: bool = False
    inherited_from: Period | None = None

    @property
    def amount(self) -> Decimal:
        return parse_amount(self.value)


@dataclass(frozen=True)
class BalanceChange:
    absolute: Decimal
    percentage: Decimal


@dataclass
class Snapshot:
    """
    Complete valuation of a user's assets at one month.

    Attributes:
        period: Target month
        currency: Label for the total (no conversion is applied)
        total_balance: Sum of effective values over hierarchy assets
        change_from_previous: Delta against the preceding month's total
        values: One EffectiveValue per hierarchy asset, in hierarchy order
    """

    period: Period
    currency: str
    total_balance: Decimal
    change_from_previous: BalanceChange
    values: list[EffectiveValue] = field(default_factory=list)

    def amounts(self) -> dict[str, Decimal]:
        """Effective amount per asset id."""
        return {ev.asset_id: ev.amount for ev in self.values}


# =============================================================================
# TIME SERIES
# =============================================================================

@dataclass
class MonthlyTotal:
    """Total and per-class sub-totals for one month of a window."""

    period: Period
    total: Decimal
    by_class: dict[str, Decimal] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.period.label


@dataclass(frozen=True)
class MonthlyContribution:
    label: str
    contribution: Decimal


@dataclass
class SeriesResult:
    """
    Output of the time-series aggregator.

    Change fields are zero when their comparison month is outside the
    window or has a non-positive total.
    """

    monthly_totals: list[MonthlyTotal]
    monthly_change: Decimal = ZERO
    monthly_change_percent: Decimal = ZERO
    ytd_change: Decimal = ZERO
    ytd_change_percent: Decimal = ZERO
    yearly_change: Decimal = ZERO
    yearly_change_percent: Decimal = ZERO
    avg_monthly_growth: Decimal = ZERO
    monthly_contributions: list[MonthlyContribution] = field(default_factory=list)
    # Resolved values per month, oldest first; consumed by the snapshot builder
    effective_values: list[dict[str, EffectiveValue]] = field(default_factory=list)

    @property
    def current_total(self) -> Decimal:
        if not self.monthly_totals:
            return ZERO
        return self.monthly_totals[-1].total


# =============================================================================
# DISTRIBUTION & PERFORMANCE
# =============================================================================

@dataclass(frozen=True)
class DistributionEntry:
    name: str
    value: Decimal
    percent: Decimal
    color: str


@dataclass(frozen=True)
class AssetPerformance:
    """Month-over-month delta for one asset. change_percent is 0 when previous <= 0."""

    asset_id: str
    asset_name: str
    current: Decimal
    previous: Decimal
    change: Decimal
    change_percent: Decimal


@dataclass
class AnalysisResult:
    class_distribution: list[DistributionEntry] = field(default_factory=list)
    currency_distribution: list[DistributionEntry] = field(default_factory=list)
    liquidity_distribution: list[DistributionEntry] = field(default_factory=list)
    asset_performance: list[AssetPerformance] = field(default_factory=list)
    top_asset: AssetPerformance | None = None
    best_growth: AssetPerformance | None = None
    worst_growth: AssetPerformance | None = None
    fill_rate: Decimal = ZERO


@dataclass
class DashboardAnalytics:
    """Everything the dashboard renders, before JSON conversion."""

    series: SeriesResult
    analysis: AnalysisResult
    current_total: Decimal = ZERO
    liquid_total: Decimal = ZERO
    illiquid_total: Decimal = ZERO
    total_assets: int = 0
    assets_with_values: int = 0

# backend/app/schemas/analytics.py
"""
Pydantic schemas for the dashboard analytics endpoint.

Amounts and percentages are computed as Decimal and emitted as JSON
numbers. Every ratio is finite: zero denominators yield 0.
"""

from pydantic import Field

from app.schemas.base import CamelModel
from app.services.balance.types import (
    AssetPerformance,
    DashboardAnalytics,
    DistributionEntry,
    MonthlyContribution,
    MonthlyTotal,
)


class MonthlyTotalResponse(CamelModel):
    """Total for one month of the window."""

    month: int
    year: int
    label: str = Field(..., description="Chart label, e.g. 'Mar 26'")
    total: float
    by_class: dict[str, float] = Field(
        default_factory=dict,
        description="Sub-total per asset class; classes without value are omitted"
    )

    @classmethod
    def from_domain(cls, mt: MonthlyTotal) -> "MonthlyTotalResponse":
        return cls(
            month=mt.period.month,
            year=mt.period.year,
            label=mt.label,
            total=float(mt.total),
            by_class={name: float(amount) for name, amount in mt.by_class.items()},
        )


class DistributionResponse(CamelModel):
    name: str
    value: float
    percent: float
    color: str = Field(..., description="Hex colour for the chart slice")

    @classmethod
    def from_domain(cls, entry: DistributionEntry) -> "DistributionResponse":
        return cls(
            name=entry.name,
            value=float(entry.value),
            percent=float(entry.percent),
            color=entry.color,
        )


class AssetPerformanceResponse(CamelModel):
    asset_id: str
    asset_name: str
    current: float
    previous: float
    change: float
    change_percent: float = Field(..., description="0 when the previous value is 0")

    @classmethod
    def from_domain(cls, perf: AssetPerformance | None) -> "AssetPerformanceResponse | None":
        if perf is None:
            return None
        return cls(
            asset_id=perf.asset_id,
            asset_name=perf.asset_name,
            current=float(perf.current),
            previous=float(perf.previous),
            change=float(perf.change),
            change_percent=float(perf.change_percent),
        )


class ContributionResponse(CamelModel):
    label: str
    contribution: float

    @classmethod
    def from_domain(cls, item: MonthlyContribution) -> "ContributionResponse":
        return cls(label=item.label, contribution=float(item.contribution))


class DashboardAnalyticsResponse(CamelModel):
    """Everything the dashboard renders."""

    current_total: float
    monthly_change: float
    monthly_change_percent: float
    ytd_change: float
    ytd_change_percent: float
    yearly_change: float
    yearly_change_percent: float
    avg_monthly_growth: float = Field(
        ...,
        description="Arithmetic mean of month-over-month percentages in the window"
    )
    liquid_total: float
    illiquid_total: float
    total_assets: int
    assets_with_values: int
    fill_rate: float
    monthly_totals: list[MonthlyTotalResponse]
    class_distribution: list[DistributionResponse]
    currency_distribution: list[DistributionResponse]
    liquidity_distribution: list[DistributionResponse]
    top_asset: AssetPerformanceResponse | None = None
    best_growth: AssetPerformanceResponse | None = None
    worst_growth: AssetPerformanceResponse | None = None
    monthly_contributions: list[ContributionResponse]

    @classmethod
    def from_domain(cls, analytics: DashboardAnalytics) -> "DashboardAnalyticsResponse":
        series = analytics.series
        analysis = analytics.analysis
        return cls(
            current_total=float(analytics.current_total),
            monthly_change=float(series.monthly_change),
            monthly_change_percent=float(series.monthly_change_percent),
            ytd_change=float(series.ytd_change),
            ytd_change_percent=float(series.ytd_change_percent),
            yearly_change=float(series.yearly_change),
            yearly_change_percent=float(series.yearly_change_percent),
            avg_monthly_growth=float(series.avg_monthly_growth),
            liquid_total=float(analytics.liquid_total),
            illiquid_total=float(analytics.illiquid_total),
            total_assets=analytics.total_assets,
            assets_with_values=analytics.assets_with_values,
            fill_rate=float(analysis.fill_rate),
            monthly_totals=[MonthlyTotalResponse.from_domain(mt) for mt in series.monthly_totals],
            class_distribution=[DistributionResponse.from_domain(d) for d in analysis.class_distribution],
            currency_distribution=[DistributionResponse.from_domain(d) for d in analysis.currency_distribution],
            liquidity_distribution=[DistributionResponse.from_domain(d) for d in analysis.liquidity_distribution],
            top_asset=AssetPerformanceResponse.from_domain(analysis.top_asset),
            best_growth=AssetPerformanceResponse.from_domain(analysis.best_growth),
            worst_growth=AssetPerformanceResponse.from_domain(analysis.worst_growth),
            monthly_contributions=[
                ContributionResponse.from_domain(c) for c in series.monthly_contributions
            ],
        )

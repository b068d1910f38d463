# backend/app/schemas/values.py
"""
Pydantic schemas for monthly values.

These schemas handle:
- The monthly snapshot (GET /values)
- Recording a value (POST /values)

Monetary amounts travel as decimal strings; percentages as numbers.
"""

from pydantic import Field

from app.models import MonthlyValue
from app.schemas.base import CamelModel, format_amount
from app.services.balance.types import EffectiveValue, Snapshot


class PeriodRef(CamelModel):
    month: int = Field(..., description="Month (1-12)")
    year: int = Field(..., description="Year")


# =============================================================================
# SNAPSHOT (GET /values)
# =============================================================================

class EffectiveValueResponse(CamelModel):
    """Value of one asset for the requested month."""

    asset_id: str = Field(..., description="Asset identifier")
    month: int
    year: int
    value: str = Field(..., description="Effective value as a decimal string ('0' if none)")
    is_inherited: bool = Field(
        ...,
        description="True if the value was carried forward from an earlier month"
    )
    inherited_from: PeriodRef | None = Field(
        default=None,
        description="Month the inherited value was recorded for"
    )

    @classmethod
    def from_effective(cls, ev: EffectiveValue) -> "EffectiveValueResponse":
        return cls(
            asset_id=ev.asset_id,
            month=ev.period.month,
            year=ev.period.year,
            value=format_amount(ev.amount),
            is_inherited=ev.is_inherited,
            inherited_from=(
                PeriodRef(month=ev.inherited_from.month, year=ev.inherited_from.year)
                if ev.inherited_from is not None
                else None
            ),
        )


class BalanceChangeResponse(CamelModel):
    absolute: str = Field(..., description="Total minus previous month's total")
    percentage: float = Field(..., description="Change in percent (0 if previous total is 0)")


class MonthlyValuesResponse(CamelModel):
    """Snapshot of all assets for one month."""

    month: int
    year: int
    total_balance: str = Field(..., description="Sum of effective values")
    total_balance_currency: str = Field(
        ...,
        description="User's default currency (values are summed without conversion)"
    )
    change_from_previous: BalanceChangeResponse
    values: list[EffectiveValueResponse]

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "MonthlyValuesResponse":
        return cls(
            month=snapshot.period.month,
            year=snapshot.period.year,
            total_balance=format_amount(snapshot.total_balance),
            total_balance_currency=snapshot.currency,
            change_from_previous=BalanceChangeResponse(
                absolute=format_amount(snapshot.change_from_previous.absolute),
                percentage=float(snapshot.change_from_previous.percentage),
            ),
            values=[EffectiveValueResponse.from_effective(ev) for ev in snapshot.values],
        )


# =============================================================================
# RECORD A VALUE (POST /values)
# =============================================================================

class MonthlyValueCreate(CamelModel):
    """
    Request body for recording a value.

    Month and year are range-checked by the service (400, not 422) so that
    invalid periods are reported the same way as on GET /values.
    """

    asset_id: str = Field(..., min_length=1, description="Asset to record the value for")
    month: int = Field(..., description="Month (1-12)")
    year: int = Field(..., description="Year (2000-9999)")
    value: str | int | float = Field(
        ...,
        description="Value as a decimal string or number"
    )


class MonthlyValueResponse(CamelModel):
    """The persisted record."""

    id: str
    asset_id: str
    month: int
    year: int
    value: str

    @classmethod
    def from_model(cls, row: MonthlyValue) -> "MonthlyValueResponse":
        return cls(
            id=row.id,
            asset_id=row.asset_id,
            month=row.month,
            year=row.year,
            value=format_amount(row.value),
        )

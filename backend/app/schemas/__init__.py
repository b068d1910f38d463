# backend/app/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

JSON field names are camelCase (see schemas/base.py).
"""

from app.schemas.analytics import (
    AssetPerformanceResponse,
    ContributionResponse,
    DashboardAnalyticsResponse,
    DistributionResponse,
    MonthlyTotalResponse,
)
from app.schemas.assets import (
    AssetClassResponse,
    AssetResponse,
    InstrumentResponse,
    ProviderResponse,
)
from app.schemas.errors import ErrorDetail, ValidationErrorDetail
from app.schemas.values import (
    BalanceChangeResponse,
    EffectiveValueResponse,
    MonthlyValueCreate,
    MonthlyValueResponse,
    MonthlyValuesResponse,
    PeriodRef,
)

__all__ = [
    # Values
    "PeriodRef",
    "EffectiveValueResponse",
    "BalanceChangeResponse",
    "MonthlyValuesResponse",
    "MonthlyValueCreate",
    "MonthlyValueResponse",
    # Analytics
    "MonthlyTotalResponse",
    "DistributionResponse",
    "AssetPerformanceResponse",
    "ContributionResponse",
    "DashboardAnalyticsResponse",
    # Asset hierarchy
    "AssetResponse",
    "ProviderResponse",
    "InstrumentResponse",
    "AssetClassResponse",
    # Errors
    "ErrorDetail",
    "ValidationErrorDetail",
]

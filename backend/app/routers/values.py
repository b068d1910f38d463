# backend/app/routers/values.py
"""
Monthly value endpoints.

- GET /values?month=M&year=Y - Snapshot of every asset for one month
- POST /values - Record (insert or overwrite) one asset's value for a month

Months without a recorded value inherit the most recent earlier value;
the snapshot marks such values with isInherited and inheritedFrom.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_balance_service, get_current_user
from app.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT, RATE_LIMIT_WRITE
from app.models import User
from app.schemas.errors import ErrorDetail
from app.schemas.values import (
    MonthlyValueCreate,
    MonthlyValueResponse,
    MonthlyValuesResponse,
)
from app.services.balance import BalanceService, Period

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/values",
    tags=["Values"],
)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "",
    response_model=MonthlyValuesResponse,
    summary="Get the monthly snapshot",
    response_description="Effective value per asset, total balance and change",
    responses={400: {"model": ErrorDetail, "description": "Invalid month or year"}},
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_values(
        request: Request,  # Required for rate limiting
        month: int = Query(..., description="Month (1-12)"),
        year: int = Query(..., description="Year (2000-9999)"),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        service: BalanceService = Depends(get_balance_service),
) -> MonthlyValuesResponse:
    """
    Get every asset's effective value for a month.

    - Assets with a value recorded for the month report it as is
    - Assets without one inherit the most recent earlier value
    - Assets with no earlier value report "0"

    `changeFromPrevious` compares the total against the preceding month's
    total (also with inheritance); the percentage is 0 when that total is 0.

    Raises **400** if month is not 1-12 or year is outside 2000-9999.
    """
    snapshot = service.get_snapshot(db, current_user, Period(month=month, year=year))
    return MonthlyValuesResponse.from_snapshot(snapshot)


@router.post(
    "",
    response_model=MonthlyValueResponse,
    summary="Record a monthly value",
    response_description="The stored value",
    responses={
        400: {"model": ErrorDetail, "description": "Invalid period or value"},
        404: {"model": ErrorDetail, "description": "Asset not found"},
    },
)
@limiter.limit(RATE_LIMIT_WRITE)
def record_value(
        request: Request,  # Required for rate limiting
        payload: MonthlyValueCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        service: BalanceService = Depends(get_balance_service),
) -> MonthlyValueResponse:
    """
    Insert or overwrite the value of an asset for a month.

    At most one value exists per asset and month; recording again
    replaces it.

    Raises **404** if the asset does not exist or belongs to another user,
    **400** if the period is invalid or the value is not a number.
    """
    row = service.record_value(
        db,
        current_user,
        asset_id=payload.asset_id,
        period=Period(month=payload.month, year=payload.year),
        value=payload.value,
    )
    return MonthlyValueResponse.from_model(row)

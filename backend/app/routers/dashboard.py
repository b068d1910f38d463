# backend/app/routers/dashboard.py
"""
Dashboard analytics endpoint.

- GET /dashboard/analytics?months=N - Time series, comparisons,
  distributions and top/best/worst assets for the last N months

The window ends at the current calendar month and is clamped to 1-24.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import get_balance_service, get_current_period, get_current_user
from app.middleware.rate_limit import limiter, RATE_LIMIT_ANALYTICS
from app.models import User
from app.schemas.analytics import DashboardAnalyticsResponse
from app.services.balance import BalanceService, Period

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


@router.get(
    "/analytics",
    response_model=DashboardAnalyticsResponse,
    summary="Get dashboard analytics",
    response_description="Monthly totals, changes, distributions and performers",
)
@limiter.limit(RATE_LIMIT_ANALYTICS)
def get_dashboard_analytics(
        request: Request,  # Required for rate limiting
        months: int = Query(
            default=settings.analytics_default_months,
            description="Window size in months (values outside 1-24 are clamped)",
        ),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        current_period: Period = Depends(get_current_period),
        service: BalanceService = Depends(get_balance_service),
) -> DashboardAnalyticsResponse:
    """
    Get analytics for the last `months` months ending this month.

    - **monthlyChange**: vs. the previous month
    - **ytdChange**: vs. January of this year (when inside the window)
    - **yearlyChange**: vs. this month last year (when inside the window)
    - **avgMonthlyGrowth**: mean of month-over-month percentages

    Comparisons against a missing or zero total report 0. A user without
    assets gets zero totals, empty distributions and null performers.
    """
    analytics = service.get_dashboard_analytics(db, current_user, current_period, months)
    return DashboardAnalyticsResponse.from_domain(analytics)

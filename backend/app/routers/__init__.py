# backend/app/routers/__init__.py
"""
API routers for the Wealth Tracker.

Each router handles a specific domain:
- values: Monthly value snapshots and value recording
- dashboard: Time series and distribution analytics
- assets: Read-only asset hierarchy
"""

from app.routers.assets import router as assets_router
from app.routers.dashboard import router as dashboard_router
from app.routers.values import router as values_router

__all__ = [
    "assets_router",
    "dashboard_router",
    "values_router",
]

# tests/routers/test_dashboard_api.py
"""
Integration tests for GET /dashboard/analytics.

The current month is pinned to March 2026 by the client fixture.

Tests validate:
- Response structure (camelCase keys, numbers for amounts)
- Window default, clamping and 422 for non-integers
- Empty-user response
- Totals, distributions and performers for a small portfolio
"""

import pytest

from app.services.constants import DISTRIBUTION_PALETTE
from tests.conftest import create_asset, create_value


class TestDashboardAnalytics:

    def test_empty_user(self, auth_client):
        response = auth_client.get("/dashboard/analytics")

        assert response.status_code == 200
        data = response.json()
        assert data["currentTotal"] == 0
        assert data["totalAssets"] == 0
        assert data["assetsWithValues"] == 0
        assert len(data["monthlyTotals"]) == 12
        assert all(mt["byClass"] == {} for mt in data["monthlyTotals"])
        assert data["monthlyContributions"] == []
        assert data["classDistribution"] == []
        assert data["topAsset"] is None
        assert data["bestGrowth"] is None
        assert data["worstGrowth"] is None

    def test_default_window_is_twelve_months(self, auth_client, db, sample_user):
        create_asset(db, sample_user)

        data = auth_client.get("/dashboard/analytics").json()

        totals = data["monthlyTotals"]
        assert len(totals) == 12
        assert (totals[0]["month"], totals[0]["year"]) == (4, 2025)
        assert (totals[-1]["month"], totals[-1]["year"]) == (3, 2026)
        assert totals[-1]["label"] == "Mar 26"

    @pytest.mark.parametrize("months,expected", [("0", 1), ("-3", 1), ("6", 6), ("50", 24)])
    def test_window_is_clamped(self, auth_client, db, sample_user, months, expected):
        create_asset(db, sample_user)

        response = auth_client.get("/dashboard/analytics", params={"months": months})

        assert response.status_code == 200
        assert len(response.json()["monthlyTotals"]) == expected

    def test_non_integer_months_returns_422(self, auth_client):
        response = auth_client.get("/dashboard/analytics", params={"months": "twelve"})

        assert response.status_code == 422

    def test_portfolio_analytics(self, auth_client, db, sample_user):
        checking = create_asset(db, sample_user, name="Checking")
        pension = create_asset(db, sample_user, name="Pension", asset_class="Pension", is_liquid=False)
        create_value(db, sample_user, checking, 1, 2026, "1000")
        create_value(db, sample_user, checking, 2, 2026, "1000")
        create_value(db, sample_user, checking, 3, 2026, "1500")
        create_value(db, sample_user, pension, 1, 2026, "3000")

        response = auth_client.get("/dashboard/analytics", params={"months": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["currentTotal"] == 4500
        assert data["liquidTotal"] == 1500
        assert data["illiquidTotal"] == 3000
        assert data["totalAssets"] == 2
        assert data["assetsWithValues"] == 2
        assert data["fillRate"] == 100
        assert data["monthlyChange"] == 500
        assert data["monthlyChangePercent"] == pytest.approx(12.5)
        assert data["ytdChange"] == 500
        assert data["ytdChangePercent"] == pytest.approx(12.5)
        assert data["yearlyChange"] == 0
        assert data["avgMonthlyGrowth"] == pytest.approx(6.25)

        assert [mt["total"] for mt in data["monthlyTotals"]] == [4000, 4000, 4500]
        assert data["monthlyTotals"][-1]["byClass"] == {"Liquid": 1500, "Pension": 3000}
        assert data["monthlyContributions"] == [
            {"label": "Feb 26", "contribution": 0},
            {"label": "Mar 26", "contribution": 500},
        ]

        assert data["classDistribution"] == [
            {"name": "Liquid", "value": 1500, "percent": pytest.approx(100 / 3), "color": DISTRIBUTION_PALETTE[0]},
            {"name": "Pension", "value": 3000, "percent": pytest.approx(200 / 3), "color": DISTRIBUTION_PALETTE[1]},
        ]
        assert [d["name"] for d in data["liquidityDistribution"]] == ["liquid", "illiquid"]

        assert data["topAsset"]["assetId"] == pension.id
        assert data["bestGrowth"]["assetId"] == checking.id
        assert data["bestGrowth"]["changePercent"] == pytest.approx(50)
        assert data["worstGrowth"]["assetId"] == pension.id
        assert data["worstGrowth"]["changePercent"] == 0

    def test_requires_authentication(self, client):
        response = client.get("/dashboard/analytics")

        assert response.status_code == 401


class TestInheritanceEndToEnd:
    """One asset recorded in January and March, read back through both endpoints."""

    @pytest.fixture
    def asset(self, db, sample_user):
        asset = create_asset(db, sample_user, name="X", asset_class="Liquid", currency="ILS")
        create_value(db, sample_user, asset, 1, 2026, "1000")
        create_value(db, sample_user, asset, 3, 2026, "1200")
        return asset

    def test_snapshot_of_recorded_month(self, auth_client, asset):
        data = auth_client.get("/values", params={"month": 3, "year": 2026}).json()

        assert data["totalBalance"] == "1200"
        assert data["values"] == [{
            "assetId": asset.id,
            "month": 3,
            "year": 2026,
            "value": "1200",
            "isInherited": False,
            "inheritedFrom": None,
        }]

    def test_snapshot_of_gap_month_inherits(self, auth_client, asset):
        data = auth_client.get("/values", params={"month": 2, "year": 2026}).json()

        assert data["totalBalance"] == "1000"
        [value] = data["values"]
        assert value["value"] == "1000"
        assert value["isInherited"] is True
        assert value["inheritedFrom"] == {"month": 1, "year": 2026}

    def test_three_month_analytics(self, auth_client, asset):
        data = auth_client.get("/dashboard/analytics", params={"months": 3}).json()

        assert [(mt["month"], mt["year"], mt["total"]) for mt in data["monthlyTotals"]] == [
            (1, 2026, 1000),
            (2, 2026, 1000),
            (3, 2026, 1200),
        ]
        assert [c["contribution"] for c in data["monthlyContributions"]] == [0, 200]
        assert data["monthlyChange"] == 200
        assert data["currentTotal"] == 1200

# tests/routers/test_assets_api.py
"""
Integration tests for GET /assets/classes (read-only hierarchy).

Tests validate:
- Nested structure asset class -> instrument -> provider -> asset
- camelCase keys and display ordering
- Scoping to the authenticated user, with a real bearer token
"""

from app.models import Asset, AssetClass, Instrument, Provider
from tests.conftest import create_asset, create_user, get_auth_headers


class TestListAssetClasses:

    def test_nested_tree(self, auth_client, db, sample_user):
        asset = create_asset(db, sample_user, name="US Stocks", currency="USD")

        response = auth_client.get("/assets/classes")

        assert response.status_code == 200
        [klass] = response.json()
        assert klass["name"] == "Liquid"
        [instrument] = klass["instruments"]
        [provider] = instrument["providers"]
        [leaf] = provider["assets"]
        assert leaf == {
            "id": asset.id,
            "name": "US Stocks",
            "isLiquid": True,
            "currency": "USD",
            "notes": None,
            "displayOrder": 0,
        }

    def test_display_order(self, auth_client, db, sample_user):
        for order, name in ((2, "Real Estate"), (0, "Liquid"), (1, "Pension")):
            klass = AssetClass(user_id=sample_user.id, name=name, display_order=order)
            instrument = Instrument(name=f"{name} instrument")
            provider = Provider(name=f"{name} provider")
            provider.assets.append(Asset(name=f"{name} asset"))
            instrument.providers.append(provider)
            klass.instruments.append(instrument)
            db.add(klass)
        db.commit()

        data = auth_client.get("/assets/classes").json()

        assert [c["name"] for c in data] == ["Liquid", "Pension", "Real Estate"]

    def test_empty(self, auth_client):
        response = auth_client.get("/assets/classes")

        assert response.status_code == 200
        assert response.json() == []

    def test_bearer_token_scopes_to_user(self, client, db):
        alice = create_user(db, email="alice@example.com")
        bob = create_user(db, email="bob@example.com")
        create_asset(db, alice, asset_class="Alice Class")
        create_asset(db, bob, asset_class="Bob Class")

        response = client.get("/assets/classes", headers=get_auth_headers(bob))

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Bob Class"]

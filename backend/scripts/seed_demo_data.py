#!/usr/bin/env python3
# backend/scripts/seed_demo_data.py
"""
Seed a demo user with a three-class asset hierarchy and a few months of values.

Some months are deliberately left out so the dashboard shows inherited values.
Prints a bearer token for the demo user at the end.

Usage:
    python backend/scripts/seed_demo_data.py
"""
import logging
import sys
from decimal import Decimal
from pathlib import Path

# Setup path to import app modules
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy import select

from app.database import SessionLocal
from app.models import Asset, AssetClass, Instrument, Provider, User
from app.services.auth import JWTHandler
from app.services.balance import Period
from app.services.repositories import SqlAlchemyValueStore
from app.utils.periods import current_month_year

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"

# class -> instrument -> provider -> [(asset, is_liquid, currency)]
DEMO_HIERARCHY = {
    "Liquid": {
        "Bank Account": {
            "Leumi": [("Checking", True, "ILS"), ("Savings", True, "ILS")],
        },
        "Brokerage": {
            "Interactive Brokers": [("US Stocks", True, "USD")],
        },
    },
    "Pension": {
        "Pension Fund": {
            "Migdal": [("Comprehensive Pension", False, "ILS")],
        },
        "Study Fund": {
            "Altshuler": [("Keren Hishtalmut", False, "ILS")],
        },
    },
    "Real Estate": {
        "Apartment": {
            "Self": [("Tel Aviv Apartment", False, "ILS")],
        },
    },
}

# Starting value and monthly step per asset; every third month is skipped
# for the illiquid assets so their values are inherited.
DEMO_VALUES = {
    "Checking": (Decimal("12000"), Decimal("350")),
    "Savings": (Decimal("40000"), Decimal("500")),
    "US Stocks": (Decimal("25000"), Decimal("900")),
    "Comprehensive Pension": (Decimal("180000"), Decimal("2100")),
    "Keren Hishtalmut": (Decimal("65000"), Decimal("1200")),
    "Tel Aviv Apartment": (Decimal("2400000"), Decimal("0")),
}

DEMO_MONTHS = 8


def _get_or_create_user(db) -> User:
    user = db.scalar(select(User).where(User.email == DEMO_EMAIL))
    if user is None:
        user = User(email=DEMO_EMAIL, name="Demo User", default_currency="ILS")
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created user: {user.email}")
    else:
        logger.info(f"User exists: {user.email}")
    return user


def _create_hierarchy(db, user: User) -> dict[str, Asset]:
    if user.asset_classes:
        logger.info("Hierarchy exists, reusing it")
        return {
            asset.name: asset
            for asset_class in user.asset_classes
            for instrument in asset_class.instruments
            for provider in instrument.providers
            for asset in provider.assets
        }

    assets: dict[str, Asset] = {}
    for class_order, (class_name, instruments) in enumerate(DEMO_HIERARCHY.items()):
        asset_class = AssetClass(name=class_name, display_order=class_order, owner=user)
        for instrument_order, (instrument_name, providers) in enumerate(instruments.items()):
            instrument = Instrument(name=instrument_name, display_order=instrument_order)
            asset_class.instruments.append(instrument)
            for provider_order, (provider_name, leaves) in enumerate(providers.items()):
                provider = Provider(name=provider_name, display_order=provider_order)
                instrument.providers.append(provider)
                for asset_order, (asset_name, is_liquid, currency) in enumerate(leaves):
                    asset = Asset(
                        name=asset_name,
                        is_liquid=is_liquid,
                        currency=currency,
                        display_order=asset_order,
                    )
                    provider.assets.append(asset)
                    assets[asset_name] = asset
        db.add(asset_class)

    db.commit()
    logger.info(f"Created {len(assets)} assets in {len(DEMO_HIERARCHY)} classes")
    return assets


def seed() -> None:
    db = SessionLocal()
    store = SqlAlchemyValueStore()
    try:
        logger.info("Starting database seeding...")
        user = _get_or_create_user(db)
        assets = _create_hierarchy(db, user)

        month, year = current_month_year()
        current = Period(month=month, year=year)
        written = 0
        for offset in range(DEMO_MONTHS):
            period = current.shift(offset - DEMO_MONTHS + 1)
            for name, asset in assets.items():
                start, step = DEMO_VALUES.get(name, (Decimal("0"), Decimal("0")))
                if not asset.is_liquid and offset % 3 == 2:
                    continue
                store.upsert(db, user.id, asset.id, period, start + step * offset)
                written += 1

        logger.info(f"Recorded {written} monthly values over {DEMO_MONTHS} months")

        token = JWTHandler.create_access_token(user.id, user.email)
        print(f"\nBearer token for {user.email}:\n{token}\n")
    finally:
        db.close()


if __name__ == "__main__":
    seed()

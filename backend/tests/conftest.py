# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Database session fixtures (in-memory SQLite)
- API client with dependency overrides (db, user, current month)
- Sample data factories for the asset hierarchy and monthly values
"""

import os

# Set required environment variables BEFORE importing app modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-at-least-32-chars-long")

from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import (
    Base,
    Asset,
    AssetClass,
    Instrument,
    MonthlyValue,
    Provider,
    User,
)
from app.services.balance import AssetInfo, MonthlyValueRecord, Period

# Pinned "today" for API tests
CURRENT_PERIOD = Period(month=3, year=2026)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# =============================================================================
# SAMPLE DATA FACTORIES
# =============================================================================

def create_user(
        db: Session,
        email: str = "test@example.com",
        default_currency: str = "ILS",
        is_active: bool = True,
) -> User:
    """Factory function for creating User entities in the database."""
    user = User(email=email, default_currency=default_currency, is_active=is_active)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_asset(
        db: Session,
        user: User,
        name: str = "Checking",
        asset_class: str = "Liquid",
        is_liquid: bool = True,
        currency: str = "ILS",
        display_order: int = 0,
) -> Asset:
    """
    Factory function for creating an Asset with its own class/instrument/provider.

    Assets created with the same asset_class name share the class row,
    so class-level grouping can be exercised.
    """
    klass = next((c for c in user.asset_classes if c.name == asset_class), None)
    if klass is None:
        klass = AssetClass(
            user_id=user.id,
            name=asset_class,
            display_order=len(user.asset_classes),
        )
        db.add(klass)
        db.flush()
        instrument = Instrument(asset_class_id=klass.id, name=f"{asset_class} Instrument")
        db.add(instrument)
        db.flush()
        provider = Provider(instrument_id=instrument.id, name=f"{asset_class} Provider")
        db.add(provider)
        db.flush()
    else:
        provider = klass.instruments[0].providers[0]

    asset = Asset(
        provider_id=provider.id,
        name=name,
        is_liquid=is_liquid,
        currency=currency,
        display_order=display_order,
    )
    db.add(asset)
    db.commit()
    db.refresh(asset)
    db.refresh(user)
    return asset


def create_value(
        db: Session,
        user: User,
        asset: Asset,
        month: int,
        year: int,
        value: str | Decimal,
) -> MonthlyValue:
    """Factory function for creating MonthlyValue rows directly."""
    row = MonthlyValue(
        asset_id=asset.id,
        user_id=user.id,
        month=month,
        year=year,
        value=Decimal(str(value)),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def make_asset_info(
        asset_id: str,
        name: str | None = None,
        asset_class_name: str = "Liquid",
        is_liquid: bool = True,
        currency: str = "ILS",
) -> AssetInfo:
    """Factory function for in-memory hierarchy entries."""
    return AssetInfo(
        id=asset_id,
        name=name or asset_id,
        is_liquid=is_liquid,
        currency=currency,
        asset_class_name=asset_class_name,
    )


def make_record(asset_id: str, month: int, year: int, value: str) -> MonthlyValueRecord:
    """Factory function for in-memory value records."""
    return MonthlyValueRecord(asset_id=asset_id, month=month, year=year, value=Decimal(value))


def get_auth_headers(user: User) -> dict[str, str]:
    """Get authorization headers with JWT token for a user."""
    from app.services.auth.jwt_handler import JWTHandler
    token = JWTHandler.create_access_token(user_id=user.id, email=user.email)
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# FIXTURE EXPORTS (for convenience imports in tests)
# =============================================================================

@pytest.fixture
def sample_user(db: Session) -> User:
    """Provide a sample User for tests."""
    return create_user(db)


# =============================================================================
# API CLIENT
# =============================================================================

@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """
    TestClient with the database and the current month overridden.

    Authentication is NOT overridden: requests must send a bearer token
    (see get_auth_headers) or use the auth_client fixture.
    """
    from app.main import app
    from app.database import get_db
    from app.dependencies import get_current_period

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_period] = lambda: CURRENT_PERIOD

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def auth_client(client: TestClient, sample_user: User) -> TestClient:
    """TestClient whose requests are authenticated as sample_user."""
    from app.main import app
    from app.dependencies import get_current_user

    app.dependency_overrides[get_current_user] = lambda: sample_user
    return client

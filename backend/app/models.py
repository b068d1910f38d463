# backend/app/models.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, Numeric, UniqueConstraint, Boolean, Integer, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def _new_id() -> str:
    """Opaque identifier for hierarchy rows and values."""
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    # Label for summed balances; no conversion is applied to asset values
    default_currency: Mapped[str] = mapped_column(String(3), default="ILS")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    asset_classes: Mapped[list["AssetClass"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="AssetClass.display_order",
    )


# =============================================================================
# ASSET HIERARCHY: asset class -> instrument -> provider -> asset
# =============================================================================

class AssetClass(Base):
    """
    Top level of a user's asset tree (e.g. "Liquid", "Pension", "Real Estate").

    Every level below is owned by its parent and removed with it.
    """
    __tablename__ = "asset_classes"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    owner: Mapped["User"] = relationship(back_populates="asset_classes")
    instruments: Mapped[list["Instrument"]] = relationship(
        back_populates="asset_class",
        cascade="all, delete-orphan",
        order_by="Instrument.display_order",
    )


class Instrument(Base):
    """Kind of holding within a class (e.g. "Bank Account", "Pension Fund")."""
    __tablename__ = "instruments"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    asset_class_id: Mapped[str] = mapped_column(ForeignKey("asset_classes.id"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    asset_class: Mapped["AssetClass"] = relationship(back_populates="instruments")
    providers: Mapped[list["Provider"]] = relationship(
        back_populates="instrument",
        cascade="all, delete-orphan",
        order_by="Provider.display_order",
    )


class Provider(Base):
    """Institution holding the asset (e.g. a bank or fund manager)."""
    __tablename__ = "providers"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    instrument_id: Mapped[str] = mapped_column(ForeignKey("instruments.id"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    instrument: Mapped["Instrument"] = relationship(back_populates="providers")
    assets: Mapped[list["Asset"]] = relationship(
        back_populates="provider",
        cascade="all, delete-orphan",
        order_by="Asset.display_order",
    )


class Asset(Base):
    """
    A single trackable holding (bank account, pension fund, property).

    Leaf of the hierarchy. Monthly values hang off assets and are deleted
    together with them, so values never outlive their asset.
    """
    __tablename__ = "assets"
    __table_args__ = (
        UniqueConstraint("provider_id", "name", name="uq_provider_asset_name"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    provider_id: Mapped[str] = mapped_column(ForeignKey("providers.id"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    is_liquid: Mapped[bool] = mapped_column(Boolean, default=False)
    currency: Mapped[str] = mapped_column(String(3), default="ILS")
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    provider: Mapped["Provider"] = relationship(back_populates="assets")
    monthly_values: Mapped[list["MonthlyValue"]] = relationship(
        back_populates="asset",
        cascade="all, delete-orphan",
    )


class MonthlyValue(Base):
    """
    One recorded valuation of one asset for one calendar month.

    At most one row per (asset, month, year); writes are upserts.
    Months without a row inherit the most recent earlier value when read.
    """
    __tablename__ = "monthly_values"
    __table_args__ = (
        UniqueConstraint("asset_id", "month", "year", name="uq_asset_month_year"),
        # "All values for user X up to (year, month)" - the only history query
        Index("ix_monthly_value_user_year_month", "user_id", "year", "month"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    asset_id: Mapped[str] = mapped_column(ForeignKey("assets.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    month: Mapped[int] = mapped_column(Integer)
    year: Mapped[int] = mapped_column(Integer)
    value: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    asset: Mapped["Asset"] = relationship(back_populates="monthly_values")

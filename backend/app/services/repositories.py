# backend/app/services/repositories.py
"""
SQLAlchemy implementations of the persistence collaborators.

- SqlAlchemyAssetHierarchy: reads the asset tree of a user
- SqlAlchemyValueStore: reads value history, upserts monthly values

Query Strategy:
    The balance engine never queries per month. A request issues one
    hierarchy query (with eager-loaded levels) and one range query for
    the value history, then resolves every month in memory.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.config import settings
from app.models import Asset, AssetClass, Instrument, MonthlyValue, Provider
from app.services.balance.types import AssetInfo, MonthlyValueRecord, Period

logger = logging.getLogger(__name__)


def _is_unique_constraint_violation(integrity_error: IntegrityError) -> bool:
    """
    Check if an IntegrityError is caused by a unique constraint violation.

    Args:
        integrity_error: The SQLAlchemy IntegrityError to check

    Returns:
        True if this is a unique constraint violation, False otherwise
    """
    # PostgreSQL error code 23505 = unique_violation
    if hasattr(integrity_error.orig, 'pgcode'):
        return integrity_error.orig.pgcode == '23505'
    # SQLite reports "UNIQUE constraint failed: ..."
    return 'unique constraint' in str(integrity_error.orig).lower()


def _to_record(row: MonthlyValue) -> MonthlyValueRecord:
    return MonthlyValueRecord(
        asset_id=row.asset_id,
        month=row.month,
        year=row.year,
        value=row.value,
    )


# =============================================================================
# ASSET HIERARCHY
# =============================================================================

class SqlAlchemyAssetHierarchy:
    """Reads a user's asset tree, every level ordered by display_order."""

    def fetch_tree(self, db: Session, user_id: int) -> list[AssetClass]:
        # Child collections are ordered by the relationship's order_by
        query = (
            select(AssetClass)
            .where(AssetClass.user_id == user_id)
            .options(
                selectinload(AssetClass.instruments)
                .selectinload(Instrument.providers)
                .selectinload(Provider.assets)
            )
            .order_by(AssetClass.display_order, AssetClass.created_at)
        )
        return list(db.scalars(query).all())

    def fetch_hierarchy(self, db: Session, user_id: int) -> list[AssetInfo]:
        """
        Flatten the tree into leaf assets.

        Returns:
            AssetInfo per asset, in class -> instrument -> provider -> asset
            display order
        """
        assets: list[AssetInfo] = []
        for asset_class in self.fetch_tree(db, user_id):
            for instrument in asset_class.instruments:
                for provider in instrument.providers:
                    for asset in provider.assets:
                        assets.append(
                            AssetInfo(
                                id=asset.id,
                                name=asset.name,
                                is_liquid=asset.is_liquid,
                                currency=asset.currency or settings.default_currency,
                                asset_class_name=asset_class.name,
                                display_order=asset.display_order,
                            )
                        )
        logger.debug(f"Fetched hierarchy for user {user_id}: {len(assets)} assets")
        return assets

    def owns_asset(self, db: Session, user_id: int, asset_id: str) -> bool:
        """True if the asset exists and its class belongs to the user."""
        query = (
            select(Asset.id)
            .join(Asset.provider)
            .join(Provider.instrument)
            .join(Instrument.asset_class)
            .where(Asset.id == asset_id, AssetClass.user_id == user_id)
        )
        return db.scalar(query) is not None


# =============================================================================
# VALUE STORE
# =============================================================================

class SqlAlchemyValueStore:
    """
    Monthly value persistence.

    Uniqueness of (asset_id, month, year) is enforced by the
    uq_asset_month_year constraint; upsert() is last-write-wins on it.
    """

    def fetch_value_history(
            self,
            db: Session,
            user_id: int,
            asset_ids: list[str],
            end: Period,
    ) -> list[MonthlyValueRecord]:
        """
        Fetch every record at or before ``end`` for the given assets.

        One range query. Results are newest first.
        """
        if not asset_ids:
            return []

        query = (
            select(MonthlyValue)
            .where(
                MonthlyValue.user_id == user_id,
                MonthlyValue.asset_id.in_(asset_ids),
                or_(
                    MonthlyValue.year < end.year,
                    and_(MonthlyValue.year == end.year, MonthlyValue.month <= end.month),
                ),
            )
            .order_by(MonthlyValue.year.desc(), MonthlyValue.month.desc())
        )
        records = [_to_record(row) for row in db.scalars(query).all()]
        logger.debug(f"Fetched {len(records)} value records up to {end} for user {user_id}")
        return records

    def get_month(
            self,
            db: Session,
            user_id: int,
            asset_ids: list[str],
            period: Period,
    ) -> list[MonthlyValueRecord]:
        """Records recorded exactly for ``period`` (kept as part of the value store contract)."""
        if not asset_ids:
            return []

        query = select(MonthlyValue).where(
            MonthlyValue.user_id == user_id,
            MonthlyValue.asset_id.in_(asset_ids),
            MonthlyValue.month == period.month,
            MonthlyValue.year == period.year,
        )
        return [_to_record(row) for row in db.scalars(query).all()]

    def _find(self, db: Session, asset_id: str, period: Period) -> MonthlyValue | None:
        query = select(MonthlyValue).where(
            MonthlyValue.asset_id == asset_id,
            MonthlyValue.month == period.month,
            MonthlyValue.year == period.year,
        )
        return db.scalar(query)

    def upsert(
            self,
            db: Session,
            user_id: int,
            asset_id: str,
            period: Period,
            value: Decimal,
    ) -> MonthlyValue:
        """
        Insert or overwrite the value for (asset, month, year).

        Handles race conditions where a concurrent request inserts the same
        key between our read and our insert: on a unique constraint
        violation we rollback, re-read the winner's row and overwrite it.

        Returns:
            The persisted MonthlyValue row
        """
        existing = self._find(db, asset_id, period)
        if existing is not None:
            existing.value = value
            db.commit()
            db.refresh(existing)
            return existing

        row = MonthlyValue(
            asset_id=asset_id,
            user_id=user_id,
            month=period.month,
            year=period.year,
            value=value,
        )
        db.add(row)

        try:
            db.commit()
            db.refresh(row)
            return row
        except IntegrityError as e:
            db.rollback()

            if not _is_unique_constraint_violation(e):
                logger.error(f"Value upsert for asset {asset_id} at {period} failed: {e}")
                raise

            logger.info(
                f"Value for asset {asset_id} at {period} inserted by "
                "concurrent request, overwriting"
            )
            existing = self._find(db, asset_id, period)
            if existing is None:
                raise
            existing.value = value
            db.commit()
            db.refresh(existing)
            return existing

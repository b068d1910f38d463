# backend/app/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- Repository classes satisfy protocols without modification
- Test fakes work without explicit inheritance
- Clear documentation of what BalanceService needs from persistence
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.models import AssetClass, MonthlyValue
    from app.services.balance.types import AssetInfo, MonthlyValueRecord, Period


class AssetHierarchyProtocol(Protocol):
    """Read access to a user's asset class -> instrument -> provider -> asset tree."""

    def fetch_hierarchy(self, db: Session, user_id: int) -> list[AssetInfo]:
        """Leaf assets flattened in display order."""
        ...

    def fetch_tree(self, db: Session, user_id: int) -> list[AssetClass]:
        """Nested tree, every level in display order."""
        ...

    def owns_asset(self, db: Session, user_id: int, asset_id: str) -> bool:
        ...


class ValueStoreProtocol(Protocol):
    """Persistence of one value per (asset, month, year)."""

    def fetch_value_history(
        self,
        db: Session,
        user_id: int,
        asset_ids: list[str],
        end: Period,
    ) -> list[MonthlyValueRecord]:
        """All records at or before ``end``, newest first."""
        ...

    def get_month(
        self,
        db: Session,
        user_id: int,
        asset_ids: list[str],
        period: Period,
    ) -> list[MonthlyValueRecord]:
        """Records for exactly ``period``; kept as part of the value store contract."""
        ...

    def upsert(
        self,
        db: Session,
        user_id: int,
        asset_id: str,
        period: Period,
        value: Decimal,
    ) -> MonthlyValue:
        ...

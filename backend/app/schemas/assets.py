# backend/app/schemas/assets.py
"""
Pydantic schemas for the read-only asset hierarchy.

asset class -> instrument -> provider -> asset, each level in display order.
"""

from pydantic import ConfigDict, Field

from app.schemas.base import CamelModel


class _TreeNode(CamelModel):
    model_config = ConfigDict(from_attributes=True)


class AssetResponse(_TreeNode):
    id: str
    name: str
    is_liquid: bool = Field(..., description="Counts towards the liquid total")
    currency: str = Field(..., description="Asset's own currency (no conversion is applied)")
    notes: str | None = None
    display_order: int


class ProviderResponse(_TreeNode):
    id: str
    name: str
    display_order: int
    assets: list[AssetResponse] = Field(default_factory=list)


class InstrumentResponse(_TreeNode):
    id: str
    name: str
    display_order: int
    providers: list[ProviderResponse] = Field(default_factory=list)


class AssetClassResponse(_TreeNode):
    id: str
    name: str
    display_order: int
    instruments: list[InstrumentResponse] = Field(default_factory=list)

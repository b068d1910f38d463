# backend/app/routers/assets.py
"""
Asset hierarchy endpoint (read-only).

- GET /assets/classes - asset class -> instrument -> provider -> asset tree

Creating, renaming, reordering and deleting hierarchy nodes is handled
by the asset management service, not this API.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_asset_hierarchy, get_current_user
from app.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT
from app.models import User
from app.schemas.assets import AssetClassResponse
from app.services.repositories import SqlAlchemyAssetHierarchy

router = APIRouter(
    prefix="/assets",
    tags=["Assets"],
)


@router.get(
    "/classes",
    response_model=list[AssetClassResponse],
    summary="Get the asset hierarchy",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def list_asset_classes(
        request: Request,  # Required for rate limiting
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        hierarchy: SqlAlchemyAssetHierarchy = Depends(get_asset_hierarchy),
) -> list[AssetClassResponse]:
    """
    Get the current user's asset classes with nested instruments,
    providers and assets, every level in display order.
    """
    tree = hierarchy.fetch_tree(db, current_user.id)
    return [AssetClassResponse.model_validate(asset_class) for asset_class in tree]

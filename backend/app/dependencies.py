# backend/app/dependencies.py
"""
Dependency injection module for FastAPI services.

This module provides singleton service instances that are shared across
all requests, plus the request-scoped dependencies every router uses:
the authenticated user and the current calendar month.

Services are lazily initialized on first use to avoid import-time side effects.

Usage in routers:
    from app.dependencies import (
        get_balance_service,
        get_current_user,
        get_current_period,
    )

    @router.get("/values")
    def get_values(
        service: BalanceService = Depends(get_balance_service),
        current_user: User = Depends(get_current_user),
    ):
        ...
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import User
from app.services.auth.jwt_handler import JWTHandler
from app.services.balance import BalanceService, Period
from app.services.exceptions import TokenExpiredError, InvalidCredentialsError
from app.services.repositories import SqlAlchemyAssetHierarchy, SqlAlchemyValueStore
from app.utils.context import set_user_id
from app.utils.periods import current_month_year

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT authentication
_bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================
# Using @lru_cache ensures the function returns the same instance on every call
#
# Order matters: define dependencies before dependents
# 1. get_asset_hierarchy, get_value_store (no deps)
# 2. get_balance_service (depends on both)


@lru_cache(maxsize=1)
def get_asset_hierarchy() -> SqlAlchemyAssetHierarchy:
    logger.debug("Initializing singleton SqlAlchemyAssetHierarchy")
    return SqlAlchemyAssetHierarchy()


@lru_cache(maxsize=1)
def get_value_store() -> SqlAlchemyValueStore:
    logger.debug("Initializing singleton SqlAlchemyValueStore")
    return SqlAlchemyValueStore()


@lru_cache(maxsize=1)
def get_balance_service() -> BalanceService:
    """
    Get the singleton BalanceService instance.

    The service is stateless between requests; sharing it avoids rebuilding
    its resolver, builder, aggregator and analyzer per call.
    """
    logger.debug("Initializing singleton BalanceService")
    return BalanceService(
        hierarchy=get_asset_hierarchy(),
        values=get_value_store(),
    )


# =============================================================================
# REQUEST-SCOPED DEPENDENCIES
# =============================================================================


def get_current_period() -> Period:
    """
    The current calendar month (UTC).

    Overridden in tests to pin the clock.
    """
    month, year = current_month_year()
    return Period(month=month, year=year)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    Dependency that extracts and validates the current user from JWT.

    Tokens are issued by the external auth service; here they are only
    verified and mapped to an active user.

    Raises:
        HTTPException 401: If no token provided or token is invalid/expired
        HTTPException 401: If user not found or inactive
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        user_id = JWTHandler.user_id_from_token(credentials.credentials)
    except TokenExpiredError:
        logger.warning("Rejected expired access token")
        raise _unauthorized("Token has expired")
    except InvalidCredentialsError as e:
        logger.warning(f"Rejected access token: {e}")
        raise _unauthorized(str(e))

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise _unauthorized("User account is inactive")

    set_user_id(user.id)
    return user


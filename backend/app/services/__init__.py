# backend/app/services/__init__.py
"""
Service layer for business logic.

This package contains the service layer which encapsulates business logic
separate from the API (router) layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions
- Receive database sessions as parameters (not via Depends)
- Are easily testable via dependency injection

Usage:
    from app.services.balance import BalanceService
    from app.services import (
        AssetNotFoundError,
        InvalidPeriodError,
        InvalidValueError,
    )

Architecture:
    services/
    ├── __init__.py                  # This file - exception exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Business constants and limits
    ├── protocols.py                 # Collaborator interfaces (Protocol classes)
    ├── repositories.py              # SQLAlchemy implementations of the protocols
    ├── auth/                        # Bearer token validation
    │   └── jwt_handler.py
    └── balance/                     # Balance engine
        ├── service.py               # Main balance orchestrator
        ├── types.py                 # Balance data types
        ├── resolver.py              # Value inheritance (forward-fill)
        ├── snapshot.py              # Single-month snapshot
        ├── series.py                # Multi-month series and comparisons
        └── analyzer.py              # Distributions and performance

Services are imported from their subpackages rather than re-exported
here, so that app.utils can depend on constants and exceptions without
import cycles.
"""

from app.services.exceptions import (
    # Base exceptions
    ServiceError,
    # Validation
    ValidationError,
    InvalidPeriodError,
    InvalidValueError,
    # Not found
    NotFoundError,
    AssetNotFoundError,
    # Authentication
    AuthenticationError,
    InvalidCredentialsError,
    TokenExpiredError,
)

__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "InvalidPeriodError",
    "InvalidValueError",
    # Not found
    "NotFoundError",
    "AssetNotFoundError",
    # Authentication
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenExpiredError",
]

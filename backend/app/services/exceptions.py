# backend/app/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The router layer is responsible for mapping these to appropriate HTTP responses.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── InvalidPeriodError
    │   └── InvalidValueError
    ├── NotFoundError
    │   └── AssetNotFoundError
    └── AuthenticationError
        ├── InvalidCredentialsError
        └── TokenExpiredError

The balance core (app.services.balance) raises none of these for missing
data: empty hierarchies and empty histories produce zero-valued results.
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors (invalid parameters, values
    that cannot be parsed, etc.), NOT for request shape validation which is
    handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidPeriodError(ValidationError):
    """
    Raised when a (month, year) pair is outside the supported calendar.

    Valid periods have month in 1..12 and year in 2000..9999.
    """

    def __init__(self, month: int, year: int) -> None:
        self.month = month
        self.year = year
        field = "month" if not 1 <= month <= 12 else "year"
        super().__init__(
            f"Invalid period: month={month}, year={year}. "
            "Month must be 1-12 and year must be 2000-9999",
            field=field,
        )


class InvalidValueError(ValidationError):
    """
    Raised when a monthly value cannot be parsed as a finite decimal number.

    Attributes:
        value: The raw value as received
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid value: {value!r} is not a number", field="value")


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Asset")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class AssetNotFoundError(NotFoundError):
    """
    Raised when an asset does not exist or belongs to another user.

    Both cases are reported identically so asset ids of other users
    cannot be probed.

    Attributes:
        asset_id: ID of the asset that was not found
    """

    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(
            f"Asset {asset_id} not found",
            resource_type="Asset",
            resource_id=asset_id,
        )


# =============================================================================
# AUTHENTICATION ERRORS
# =============================================================================


class AuthenticationError(ServiceError):
    """Base exception for failed bearer-token authentication."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when a token is malformed, has a bad signature or names no active user."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """Raised when an otherwise valid access token has expired."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "InvalidPeriodError",
    "InvalidValueError",
    # Not Found
    "NotFoundError",
    "AssetNotFoundError",
    # Authentication
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenExpiredError",
]

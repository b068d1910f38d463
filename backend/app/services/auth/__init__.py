"""
Authentication boundary for the Wealth Tracker API.

Sign-in, sessions and token issuance belong to the external auth service.
This package only validates the bearer tokens it issues.

Usage:
    from app.services.auth import JWTHandler

    user_id = JWTHandler.user_id_from_token(token)
"""

from app.services.auth.jwt_handler import JWTHandler

__all__ = [
    "JWTHandler",
]

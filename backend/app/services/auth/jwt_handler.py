"""
JWT access token validation.

Users sign in through the external auth service, which issues short-lived
HS256 access tokens signed with the shared JWT_SECRET_KEY. This module
validates those tokens at the API boundary.

Token creation is kept for the demo seed script and the test suite.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.config import settings
from app.services.exceptions import TokenExpiredError, InvalidCredentialsError


class JWTHandler:
    """
    Handles JWT token creation and validation.

    Access tokens contain:
    - sub: User ID (string)
    - email: User's email
    - exp: Expiration timestamp
    - iat: Issued at timestamp
    - type: "access" (to distinguish from other token types)
    """

    @staticmethod
    def create_access_token(
        user_id: int,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create a new access token.

        Args:
            user_id: The user's database ID
            email: The user's email address
            expires_delta: Optional custom expiration time (negative for an
                already-expired token)

        Returns:
            Encoded JWT string
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

        now = datetime.now(timezone.utc)

        payload = {
            "sub": str(user_id),
            "email": email,
            "exp": now + expires_delta,
            "iat": now,
            "type": "access",
        }

        return jwt.encode(
            payload,
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

    @staticmethod
    def validate_access_token(token: str) -> dict[str, Any]:
        """
        Validate an access token and return its payload.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidCredentialsError: If the token is invalid or malformed
        """
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Access token has expired")
        except JWTError as e:
            raise InvalidCredentialsError(f"Invalid token: {str(e)}")

        if payload.get("type") != "access":
            raise InvalidCredentialsError("Invalid token type")

        return payload

    @staticmethod
    def user_id_from_token(token: str) -> int:
        """
        Validate a token and extract the user id from its subject.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidCredentialsError: If the token is invalid or has no numeric subject
        """
        payload = JWTHandler.validate_access_token(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise InvalidCredentialsError("Token subject is not a user id")

# tests/routers/test_error_handling.py
"""
Integration tests for error handling across all API endpoints.

These tests verify:
- Consistent error response format (ErrorDetail schema)
- Correct HTTP status codes for each service exception family
- Bearer token failures (missing, malformed, expired, unknown user)
- Health endpoints
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.auth.jwt_handler import JWTHandler
from app.services.exceptions import (
    InvalidCredentialsError,
    NotFoundError,
    ServiceError,
    TokenExpiredError,
    ValidationError,
)
from tests.conftest import create_user


def _assert_envelope(data: dict) -> None:
    assert set(data) == {"error", "message", "details"}
    assert isinstance(data["message"], str)


# =============================================================================
# TEST: SERVICE EXCEPTION MAPPING
# =============================================================================

@pytest.fixture(scope="module")
def raising_client():
    """
    Client for a throwaway route that raises the exception it is told to.

    The route is added to the real app so the real handlers are exercised.
    """
    errors = {
        "validation": ValidationError("bad input", field="amount"),
        "not-found": NotFoundError("Widget 7 not found", resource_type="Widget", resource_id=7),
        "expired": TokenExpiredError(),
        "invalid": InvalidCredentialsError(),
        "service": ServiceError("something broke"),
    }

    @app.get("/_raise/{kind}", include_in_schema=False)
    def _raise(kind: str):
        raise errors[kind]

    yield TestClient(app)

    app.router.routes = [r for r in app.router.routes if getattr(r, "path", "") != "/_raise/{kind}"]


class TestServiceExceptionMapping:

    def test_validation_error_is_400(self, raising_client):
        response = raising_client.get("/_raise/validation")

        assert response.status_code == 400
        data = response.json()
        _assert_envelope(data)
        assert data["error"] == "ValidationError"
        assert data["details"] == {"field": "amount"}

    def test_not_found_is_404(self, raising_client):
        response = raising_client.get("/_raise/not-found")

        assert response.status_code == 404
        assert response.json()["details"] == {"resource_type": "Widget", "resource_id": 7}

    @pytest.mark.parametrize("kind,error", [
        ("expired", "TokenExpiredError"),
        ("invalid", "InvalidCredentialsError"),
    ])
    def test_authentication_errors_are_401(self, raising_client, kind, error):
        response = raising_client.get(f"/_raise/{kind}")

        assert response.status_code == 401
        assert response.json()["error"] == error
        assert response.headers["www-authenticate"] == "Bearer"

    def test_generic_service_error_is_500(self, raising_client):
        response = raising_client.get("/_raise/service")

        assert response.status_code == 500
        data = response.json()
        _assert_envelope(data)
        assert data["message"] == "something broke"


# =============================================================================
# TEST: HTTP AND VALIDATION ERRORS
# =============================================================================

class TestHttpErrors:

    def test_unknown_route_uses_envelope(self, client: TestClient):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        _assert_envelope(data)
        assert data["error"] == "NotFoundError"

    def test_request_validation_error_format(self, auth_client: TestClient):
        response = auth_client.get("/values", params={"month": "march", "year": 2026})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["message"] == "Request validation failed"
        assert any(d["field"] == "query.month" for d in data["details"])


# =============================================================================
# TEST: BEARER TOKEN AUTHENTICATION
# =============================================================================

class TestBearerAuthentication:

    def test_missing_token(self, client: TestClient):
        response = client.get("/assets/classes")

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_malformed_token(self, client: TestClient):
        response = client.get("/assets/classes", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["error"] == "UnauthorizedError"

    def test_expired_token(self, client: TestClient, db):
        user = create_user(db)
        token = JWTHandler.create_access_token(user.id, user.email, expires_delta=timedelta(minutes=-1))

        response = client.get("/assets/classes", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    def test_unknown_user(self, client: TestClient):
        token = JWTHandler.create_access_token(999, "ghost@example.com")

        response = client.get("/assets/classes", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_inactive_user(self, client: TestClient, db):
        user = create_user(db, is_active=False)
        token = JWTHandler.create_access_token(user.id, user.email)

        response = client.get("/assets/classes", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "User account is inactive"

    def test_valid_token(self, client: TestClient, db):
        user = create_user(db)
        token = JWTHandler.create_access_token(user.id, user.email)

        response = client.get("/assets/classes", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200


# =============================================================================
# TEST: HEALTH ENDPOINTS
# =============================================================================

class TestHealth:

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert "docs" in response.json()

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["checks"]["database"]["status"] == "healthy"

    def test_liveness(self, client: TestClient):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_readiness(self, client: TestClient):
        assert client.get("/health/ready").json() == {"status": "ready"}

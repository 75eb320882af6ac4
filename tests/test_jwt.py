"""
Tests for JWT token utilities and the bearer auth dependencies.

Tests cover:
- Access token creation and decoding
- Expired and tampered tokens
- Principal resolution and role checks through a route
"""

from datetime import timedelta

import jwt
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from app.api.deps import Principal, get_optional_principal, require_roles
from app.core.jwt import create_access_token, decode_token


class TestAccessToken:
    """Tests for access token creation and validation."""

    def test_token_contains_claims(self, test_settings):
        token = create_access_token("user123", "a@example.com", role="admin", settings=test_settings)

        payload = decode_token(token, test_settings)
        assert payload["sub"] == "user123"
        assert payload["email"] == "a@example.com"
        assert payload["role"] == "admin"
        assert "exp" in payload

    def test_role_omitted_when_not_given(self, test_settings):
        token = create_access_token("user123", "a@example.com", settings=test_settings)
        assert "role" not in decode_token(token, test_settings)

    def test_expired_token_rejected(self, test_settings):
        token = create_access_token(
            "user123", "a@example.com", expires_delta=timedelta(seconds=-10), settings=test_settings
        )
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token, test_settings)

    def test_wrong_secret_rejected(self, test_settings):
        other_secret = "another-secret-key-for-signing-tokens-0123456789"
        token = jwt.encode({"sub": "user123"}, other_secret, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token, test_settings)


@pytest.fixture
def auth_client(test_app) -> TestClient:
    """App with two protected routes."""

    @test_app.get("/protected/admin")
    def admin_only(principal: Principal = Depends(require_roles("admin"))):
        return {"id": principal.id, "role": principal.role}

    @test_app.get("/protected/optional")
    def optional(principal=Depends(get_optional_principal)):
        return {"anonymous": principal is None}

    return TestClient(test_app)


class TestAuthDependencies:
    """Bearer token dependencies wired into a route."""

    def _headers(self, settings, **kwargs):
        token = create_access_token("user123", "a@example.com", settings=settings, **kwargs)
        return {"Authorization": f"Bearer {token}"}

    def test_missing_token_is_401(self, auth_client):
        response = auth_client.get("/protected/admin")
        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_invalid_token_is_401(self, auth_client):
        response = auth_client.get("/protected/admin", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_expired_token_is_401(self, auth_client, test_settings):
        headers = self._headers(test_settings, role="admin", expires_delta=timedelta(seconds=-10))
        response = auth_client.get("/protected/admin", headers=headers)
        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"

    def test_wrong_role_is_403(self, auth_client, test_settings):
        response = auth_client.get("/protected/admin", headers=self._headers(test_settings, role="editor"))
        assert response.status_code == 403
        assert response.json()["message"] == "Insufficient permissions"

    def test_matching_role_passes(self, auth_client, test_settings):
        response = auth_client.get("/protected/admin", headers=self._headers(test_settings, role="admin"))
        assert response.status_code == 200
        assert response.json() == {"id": "user123", "role": "admin"}

    def test_optional_principal(self, auth_client, test_settings):
        assert auth_client.get("/protected/optional").json() == {"anonymous": True}
        bad = {"Authorization": "Bearer not-a-token"}
        assert auth_client.get("/protected/optional", headers=bad).json() == {"anonymous": True}
        good = self._headers(test_settings)
        assert auth_client.get("/protected/optional", headers=good).json() == {"anonymous": False}

"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from captiveportal.infrastructure.auth import (
    BadSignatureError,
    InvalidTokenError,
    JWTService,
    MalformedTokenError,
    TokenExpiredError,
)

SECRET = "unit-test-secret"


@pytest.fixture
def service() -> JWTService:
    return JWTService(secret_key=SECRET, expire_hours=24)


class TestUserTokens:
    def test_round_trip_claims(self, service):
        token = service.create_user_token(user_id="u-1", email="john@test.com")

        payload = service.validate_user_token(token)

        assert payload["user_id"] == "u-1"
        assert payload["email"] == "john@test.com"
        assert payload["type"] == "user"
        assert payload["sub"] == "u-1"
        assert payload["iss"] == JWTService.ISSUER

    def test_default_lifetime(self, service):
        payload = service.decode_token(service.create_user_token("u-1", "john@test.com"))
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_expired_token(self, service):
        token = service.create_user_token(
            "u-1", "john@test.com", expires_delta=timedelta(seconds=-1)
        )
        with pytest.raises(TokenExpiredError):
            service.validate_user_token(token)

    def test_admin_token_is_not_a_user_token(self, service):
        token = service.create_admin_token("a-1", "root", "super_admin")
        with pytest.raises(InvalidTokenError):
            service.validate_user_token(token)


class TestAdminTokens:
    def test_round_trip_claims(self, service):
        token = service.create_admin_token(admin_id="a-1", username="root", role="super_admin")

        payload = service.validate_admin_token(token)

        assert payload["admin_id"] == "a-1"
        assert payload["username"] == "root"
        assert payload["role"] == "super_admin"
        assert payload["type"] == "admin"

    def test_user_token_is_not_an_admin_token(self, service):
        token = service.create_user_token("u-1", "john@test.com")
        with pytest.raises(InvalidTokenError):
            service.validate_admin_token(token)


class TestDecodeFailures:
    def test_wrong_secret(self, service):
        token = JWTService(secret_key="other-secret").create_user_token("u-1", "john@test.com")
        with pytest.raises(BadSignatureError):
            service.decode_token(token)

    def test_garbage_token(self, service):
        with pytest.raises(MalformedTokenError):
            service.decode_token("not-a-jwt")

    def test_missing_required_claims(self, service):
        token = jwt.encode(
            {"iss": JWTService.ISSUER, "user_id": "u-1", "type": "user"},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(MalformedTokenError):
            service.decode_token(token)

    def test_missing_id_claim(self, service):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "iss": JWTService.ISSUER,
                "sub": "u-1",
                "iat": now,
                "exp": now + timedelta(hours=1),
                "type": "user",
            },
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(MalformedTokenError):
            service.validate_user_token(token)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="")

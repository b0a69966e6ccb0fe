"""Unit tests for the security headers middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from captiveportal.core.config import Settings
from captiveportal.infrastructure.api.middleware import SecurityHeadersMiddleware


def _client(**overrides) -> TestClient:
    settings = Settings(_env_file=None, **overrides)
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, settings=settings)

    @app.get("/ping")
    async def ping():
        return {"success": True}

    return TestClient(app)


def test_headers_added_in_development():
    response = _client().get("/ping")

    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-XSS-Protection"] == "1; mode=block"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert "default-src 'self'" in response.headers["Content-Security-Policy"]
    assert response.headers["Permissions-Policy"] == "geolocation=(), microphone=(), camera=()"
    assert "Strict-Transport-Security" not in response.headers


def test_hsts_only_in_production():
    response = _client(environment="production", hsts_max_age=600).get("/ping")

    assert response.headers["Strict-Transport-Security"] == "max-age=600; includeSubDomains"


def test_headers_disabled():
    response = _client(security_headers_enabled=False).get("/ping")

    assert "X-Frame-Options" not in response.headers


def test_https_redirect_in_production():
    client = _client(environment="production", https_redirect_enabled=True)

    response = client.get("/ping", follow_redirects=False)

    assert response.status_code == 301
    assert response.headers["location"].startswith("https://")


def test_no_redirect_outside_production():
    response = _client(https_redirect_enabled=True).get("/ping", follow_redirects=False)

    assert response.status_code == 200

"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from captiveportal.core.config import Settings
from captiveportal.infrastructure.auth import JWTService
from captiveportal.infrastructure.persistence.database import Base
from captiveportal.infrastructure.persistence.models import AdminAccountModel, AdminRole

TEST_SECRET_KEY = "test-secret-key-for-captive-portal-tests"
ADMIN_PASSWORD = "AdminPass123!"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests, isolated from any .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        secret_key=TEST_SECRET_KEY,
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    # Importing the models registers them with Base.metadata
    from captiveportal.infrastructure.persistence import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def app(test_settings: Settings, db_session: AsyncSession) -> FastAPI:
    """Application built from test settings with the database overridden."""
    from captiveportal.infrastructure.api.app import create_app
    from captiveportal.infrastructure.persistence.database import get_db_session

    application = create_app(test_settings)
    application.dependency_overrides[get_db_session] = lambda: db_session
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client against the test application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def jwt_service(app: FastAPI) -> JWTService:
    return app.state.jwt_service


async def _create_admin(
    db_session: AsyncSession,
    username: str,
    email: str,
    role: AdminRole,
) -> AdminAccountModel:
    from captiveportal.domain.services import AdminService

    return await AdminService(db_session).create_admin(
        username=username,
        email=email,
        password=ADMIN_PASSWORD,
        role=role,
    )


@pytest_asyncio.fixture
async def super_admin(db_session: AsyncSession) -> AdminAccountModel:
    return await _create_admin(db_session, "root", "root@example.com", AdminRole.SUPER_ADMIN)


@pytest_asyncio.fixture
async def regular_admin(db_session: AsyncSession) -> AdminAccountModel:
    return await _create_admin(db_session, "operator", "operator@example.com", AdminRole.ADMIN)


@pytest.fixture
def super_admin_token(jwt_service: JWTService, super_admin: AdminAccountModel) -> str:
    return jwt_service.create_admin_token(
        admin_id=super_admin.id,
        username=super_admin.username,
        role=super_admin.role,
    )


@pytest.fixture
def admin_token(jwt_service: JWTService, regular_admin: AdminAccountModel) -> str:
    return jwt_service.create_admin_token(
        admin_id=regular_admin.id,
        username=regular_admin.username,
        role=regular_admin.role,
    )


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def super_admin_headers(super_admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {super_admin_token}"}


def _guest_payload(**overrides) -> dict:
    payload = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@test.com",
        "phone_number": "08012345678",
        "company": "Acme",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def guest_payload():
    """Factory for registration bodies of a valid guest."""
    return _guest_payload

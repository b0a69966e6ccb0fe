"""Integration tests for database initialization and bootstrap seeding."""

import pytest

from captiveportal.core.config import Settings
from captiveportal.domain.services import DEFAULT_SETTINGS, AdminService, SettingsService
from captiveportal.infrastructure.persistence.database import DatabaseManager, init_database


def _settings(tmp_path, **overrides) -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        secret_key="init-test-secret",
        database_url=f"sqlite+aiosqlite:///{tmp_path}/data/portal.db",
        **overrides,
    )


@pytest.mark.asyncio
async def test_init_creates_tables_and_seeds_settings(tmp_path):
    db = DatabaseManager(_settings(tmp_path))
    try:
        await init_database(db)

        assert (tmp_path / "data" / "portal.db").exists()
        async with db.session() as session:
            settings = await SettingsService(session).get_settings_map()
            assert set(settings) == set(DEFAULT_SETTINGS)
            assert await AdminService(session).has_super_admin() is False
    finally:
        await db.disconnect()


@pytest.mark.asyncio
async def test_init_is_idempotent(tmp_path):
    db = DatabaseManager(_settings(tmp_path))
    try:
        await init_database(db)
        async with db.session() as session:
            await SettingsService(session).update_setting("portal_title", "Lobby WiFi")

        await init_database(db)

        async with db.session() as session:
            settings = await SettingsService(session).get_settings_map()
            assert settings["portal_title"] == "Lobby WiFi"
    finally:
        await db.disconnect()


@pytest.mark.asyncio
async def test_init_creates_bootstrap_admin_once(tmp_path):
    settings = _settings(
        tmp_path,
        bootstrap_admin_username="root",
        bootstrap_admin_email="root@example.com",
        bootstrap_admin_password="RootPass123!",
    )
    db = DatabaseManager(settings)
    try:
        await init_database(db)
        await init_database(db)

        async with db.session() as session:
            service = AdminService(session)
            admins = await service.list_admins()
            assert [a.username for a in admins] == ["root"]
            assert admins[0].role == "super_admin"
            authenticated = await service.authenticate_admin("root", "RootPass123!")
            assert authenticated.id == admins[0].id
    finally:
        await db.disconnect()


@pytest.mark.asyncio
async def test_check_connection(tmp_path):
    db = DatabaseManager(_settings(tmp_path))
    try:
        (tmp_path / "data").mkdir()
        assert await db.check_connection() is True
    finally:
        await db.disconnect()

"""Unit tests for SettingsService."""

import pytest

from captiveportal.domain.exceptions import NotFoundError
from captiveportal.domain.services import SettingsService
from captiveportal.domain.services.settings_service import DEFAULT_SETTINGS


class TestSettingsService:
    @pytest.mark.asyncio
    async def test_seed_defaults(self, db_session):
        service = SettingsService(db_session)

        created = await service.seed_defaults()

        assert created == len(DEFAULT_SETTINGS)
        settings = await service.get_settings_map()
        assert settings["portal_title"] == "Welcome to Our WiFi"
        assert settings["company_logo"] == ""

    @pytest.mark.asyncio
    async def test_seed_is_idempotent_and_keeps_changes(self, db_session):
        service = SettingsService(db_session)
        await service.seed_defaults()
        await service.update_setting("portal_title", "Lobby WiFi")

        assert await service.seed_defaults() == 0
        assert (await service.get_settings_map())["portal_title"] == "Lobby WiFi"

    @pytest.mark.asyncio
    async def test_update_setting(self, db_session):
        service = SettingsService(db_session)
        await service.seed_defaults()

        setting = await service.update_setting(
            "session_timeout", "7200", description="Two hours"
        )

        assert setting.setting_value == "7200"
        assert setting.description == "Two hours"

    @pytest.mark.asyncio
    async def test_update_keeps_description_when_omitted(self, db_session):
        service = SettingsService(db_session)
        await service.seed_defaults()

        setting = await service.update_setting("support_phone", "08012345678")

        assert setting.description == DEFAULT_SETTINGS["support_phone"][1]

    @pytest.mark.asyncio
    async def test_update_unknown_setting(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await SettingsService(db_session).update_setting("no_such_key", "x")
        assert exc_info.value.message == "Setting not found"

    @pytest.mark.asyncio
    async def test_list_settings(self, db_session):
        service = SettingsService(db_session)
        await service.seed_defaults()

        keys = [s.setting_key for s in await service.list_settings()]

        assert set(keys) == set(DEFAULT_SETTINGS)

"""Portal system settings stored as key-value rows.

Values are strings shown on the portal page and in the admin console.
Nothing in the service enforces them.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.core.logging import get_logger
from captiveportal.domain.exceptions import NotFoundError
from captiveportal.infrastructure.persistence.models import SystemSettingModel
from captiveportal.infrastructure.persistence.repositories import SystemSettingRepository

logger = get_logger(__name__)

# key -> (default value, description)
DEFAULT_SETTINGS: dict[str, tuple[str, str]] = {
    "portal_title": ("Welcome to Our WiFi", "Title shown on the portal page"),
    "portal_subtitle": (
        "Please register or login to access the internet",
        "Subtitle shown on the portal page",
    ),
    "company_name": ("Your Company", "Company name shown on the portal page"),
    "company_logo": ("", "URL of the company logo"),
    "session_timeout": ("3600", "Session timeout in seconds"),
    "max_sessions_per_user": ("3", "Maximum concurrent sessions per user"),
    "data_limit_mb": ("1000", "Data limit per session in MB"),
    "registration_enabled": ("true", "Whether new registrations are accepted"),
    "terms_of_service": ("", "Terms of service text or URL"),
    "privacy_policy": ("", "Privacy policy text or URL"),
    "support_email": ("support@example.com", "Support contact email"),
    "support_phone": ("", "Support contact phone number"),
    "maintenance_mode": ("false", "Whether the portal is in maintenance mode"),
}


class SettingsService:
    """Service for reading and updating portal settings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.setting_repo = SystemSettingRepository(session)

    async def seed_defaults(self) -> int:
        """Insert every default setting that is not present yet.

        Existing values are left alone.

        Returns:
            Number of settings inserted.
        """
        existing = await self.setting_repo.list_keys()
        created = 0
        for key, (value, description) in DEFAULT_SETTINGS.items():
            if key in existing:
                continue
            await self.setting_repo.create(
                SystemSettingModel(setting_key=key, setting_value=value, description=description)
            )
            created += 1

        if created:
            await self.session.commit()
        return created

    async def list_settings(self) -> list[SystemSettingModel]:
        return await self.setting_repo.list_all()

    async def get_settings_map(self) -> dict[str, str]:
        """Return all settings as a key -> value mapping."""
        settings = await self.setting_repo.list_all()
        return {setting.setting_key: setting.setting_value or "" for setting in settings}

    async def update_setting(
        self,
        setting_key: str,
        setting_value: str,
        description: str | None = None,
    ) -> SystemSettingModel:
        """Change the value of an existing setting.

        Raises:
            NotFoundError: If the key does not exist.
        """
        setting = await self.setting_repo.get_by_key(setting_key)
        if setting is None:
            raise NotFoundError("Setting")

        setting.setting_value = setting_value
        if description is not None:
            setting.description = description

        await self.setting_repo.update(setting)
        await self.session.commit()
        logger.info("Setting updated", setting_key=setting_key)
        return setting

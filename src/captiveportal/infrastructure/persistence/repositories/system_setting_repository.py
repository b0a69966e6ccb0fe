"""System setting repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.infrastructure.persistence.models import SystemSettingModel


class SystemSettingRepository:
    """Repository for key-value system settings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self) -> list[SystemSettingModel]:
        result = await self.session.execute(
            select(SystemSettingModel).order_by(SystemSettingModel.setting_key)
        )
        return list(result.scalars().all())

    async def get_by_key(self, setting_key: str) -> SystemSettingModel | None:
        result = await self.session.execute(
            select(SystemSettingModel).where(SystemSettingModel.setting_key == setting_key)
        )
        return result.scalar_one_or_none()

    async def list_keys(self) -> set[str]:
        result = await self.session.execute(select(SystemSettingModel.setting_key))
        return set(result.scalars().all())

    async def create(self, setting: SystemSettingModel) -> SystemSettingModel:
        self.session.add(setting)
        await self.session.flush()
        return setting

    async def update(self, setting: SystemSettingModel) -> SystemSettingModel:
        self.session.add(setting)
        await self.session.flush()
        await self.session.refresh(setting)
        return setting

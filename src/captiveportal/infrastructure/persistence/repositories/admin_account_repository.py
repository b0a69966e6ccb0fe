"""Admin account repository for database operations."""

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.infrastructure.persistence.models import AdminAccountModel


class AdminAccountRepository:
    """Repository for admin account database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, admin: AdminAccountModel) -> AdminAccountModel:
        self.session.add(admin)
        await self.session.flush()
        return admin

    async def get_by_id(self, admin_id: str) -> AdminAccountModel | None:
        result = await self.session.execute(
            select(AdminAccountModel).where(AdminAccountModel.id == admin_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> AdminAccountModel | None:
        result = await self.session.execute(
            select(AdminAccountModel).where(AdminAccountModel.username == username)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[AdminAccountModel]:
        """Get every admin account, newest first."""
        result = await self.session.execute(
            select(AdminAccountModel).order_by(AdminAccountModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def role_exists(self, role: str) -> bool:
        """Check whether any active admin holds the given role."""
        result = await self.session.execute(
            select(AdminAccountModel.id)
            .where(AdminAccountModel.role == role, AdminAccountModel.is_active.is_(True))
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def update_last_login(self, admin_id: str) -> None:
        await self.session.execute(
            update(AdminAccountModel)
            .where(AdminAccountModel.id == admin_id)
            .values(last_login=datetime.now(timezone.utc))
        )
        await self.session.flush()

    async def update(self, admin: AdminAccountModel) -> AdminAccountModel:
        self.session.add(admin)
        await self.session.flush()
        await self.session.refresh(admin)
        return admin

    async def delete(self, admin: AdminAccountModel) -> None:
        await self.session.delete(admin)
        await self.session.flush()

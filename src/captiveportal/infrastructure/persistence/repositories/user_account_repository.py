"""User account repository for database operations."""

from datetime import datetime, timezone

from sqlalchemy import and_, case, func, select, update
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.infrastructure.persistence.models import UserAccountModel


class UserAccountRepository:
    """Repository for user account database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserAccountModel) -> UserAccountModel:
        """Create a new user account.

        Unique constraint violations surface as IntegrityError on flush.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserAccountModel | None:
        result = await self.session.execute(
            select(UserAccountModel).where(UserAccountModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserAccountModel | None:
        result = await self.session.execute(
            select(UserAccountModel).where(UserAccountModel.email == email)
        )
        return result.scalar_one_or_none()

    async def get_active_by_credentials(
        self, email: str, phone_number: str
    ) -> UserAccountModel | None:
        """Get an active user matching both email and normalized phone number.

        Args:
            email: Lowercased email address.
            phone_number: Normalized phone number.

        Returns:
            User model if an active match exists, None otherwise.
        """
        result = await self.session.execute(
            select(UserAccountModel).where(
                and_(
                    UserAccountModel.email == email,
                    UserAccountModel.phone_number == phone_number,
                    UserAccountModel.is_active.is_(True),
                )
            )
        )
        return result.scalar_one_or_none()

    async def update_last_login(self, user_id: str) -> None:
        """Update the last_login timestamp for a user.

        Args:
            user_id: ID of the user to update.
        """
        await self.session.execute(
            update(UserAccountModel)
            .where(UserAccountModel.id == user_id)
            .values(last_login=datetime.now(timezone.utc))
        )
        await self.session.flush()

    async def list_all(self) -> list[UserAccountModel]:
        """Get every user account, newest first."""
        result = await self.session.execute(
            select(UserAccountModel).order_by(UserAccountModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, user: UserAccountModel) -> UserAccountModel:
        """Persist changes made to a user model."""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: UserAccountModel) -> None:
        await self.session.delete(user)
        await self.session.flush()

    async def get_stats(self, recent_since: datetime) -> Row:
        """Aggregate user counts in a single query.

        Args:
            recent_since: Lower bound for the recent-login count.

        Returns:
            Row with total_users, active_users, users_with_login and recent_logins.
        """
        result = await self.session.execute(
            select(
                func.count(UserAccountModel.id).label("total_users"),
                func.count(case((UserAccountModel.is_active.is_(True), 1))).label(
                    "active_users"
                ),
                func.count(UserAccountModel.last_login).label("users_with_login"),
                func.count(case((UserAccountModel.last_login >= recent_since, 1))).label(
                    "recent_logins"
                ),
            )
        )
        return result.one()

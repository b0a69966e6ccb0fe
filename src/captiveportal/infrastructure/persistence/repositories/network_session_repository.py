"""Network session repository for database operations."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, case, func, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.infrastructure.persistence.models import (
    NetworkSessionModel,
    UserAccountModel,
)


@dataclass
class SessionFilter:
    """Optional filters applied to joined session listings."""

    user_email: str | None = None
    ip_address: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    active_only: bool = False


class NetworkSessionRepository:
    """Repository for network session database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, network_session: NetworkSessionModel) -> NetworkSessionModel:
        self.session.add(network_session)
        await self.session.flush()
        return network_session

    async def get_by_id(self, session_id: str) -> NetworkSessionModel | None:
        result = await self.session.execute(
            select(NetworkSessionModel).where(NetworkSessionModel.id == session_id)
        )
        return result.scalar_one_or_none()

    async def find_open_for_user(self, user_email: str) -> NetworkSessionModel | None:
        """Get the most recently started open session for a user."""
        result = await self.session.execute(
            select(NetworkSessionModel)
            .where(
                NetworkSessionModel.user_email == user_email,
                NetworkSessionModel.session_end.is_(None),
            )
            .order_by(NetworkSessionModel.session_start.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_email: str) -> list[NetworkSessionModel]:
        """Get a user's sessions without joining the user table, newest first."""
        result = await self.session.execute(
            select(NetworkSessionModel)
            .where(NetworkSessionModel.user_email == user_email)
            .order_by(NetworkSessionModel.session_start.desc())
        )
        return list(result.scalars().all())

    def _joined_query(self, filters: SessionFilter) -> Select:
        # Inner join on the email string: sessions of deleted users drop out
        query = select(
            NetworkSessionModel,
            UserAccountModel.first_name,
            UserAccountModel.last_name,
            UserAccountModel.company,
        ).join(
            UserAccountModel,
            UserAccountModel.email == NetworkSessionModel.user_email,
        )

        if filters.user_email is not None:
            query = query.where(NetworkSessionModel.user_email == filters.user_email)
        if filters.ip_address is not None:
            query = query.where(NetworkSessionModel.ip_address == filters.ip_address)
        if filters.start is not None:
            query = query.where(NetworkSessionModel.session_start >= filters.start)
        if filters.end is not None:
            query = query.where(NetworkSessionModel.session_start <= filters.end)
        if filters.active_only:
            query = query.where(NetworkSessionModel.session_end.is_(None))

        return query.order_by(NetworkSessionModel.session_start.desc())

    async def list_joined(
        self,
        filters: SessionFilter | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Row]:
        """List sessions joined with the owning user's name and company.

        Args:
            filters: Optional filters.
            limit: Maximum rows to return, or None for all.
            offset: Rows to skip.

        Returns:
            Rows of (NetworkSessionModel, first_name, last_name, company).
        """
        query = self._joined_query(filters or SessionFilter())
        if limit is not None:
            query = query.limit(limit).offset(offset)
        result = await self.session.execute(query)
        return list(result.all())

    async def get_totals(self) -> Row:
        """Aggregate session counts and byte totals in a single query."""
        result = await self.session.execute(
            select(
                func.count(NetworkSessionModel.id).label("total_sessions"),
                func.count(case((NetworkSessionModel.session_end.is_(None), 1))).label(
                    "active_sessions"
                ),
                func.coalesce(func.sum(NetworkSessionModel.bytes_in), 0).label(
                    "total_bytes_in"
                ),
                func.coalesce(func.sum(NetworkSessionModel.bytes_out), 0).label(
                    "total_bytes_out"
                ),
            )
        )
        return result.one()

    async def list_closed_intervals(self) -> list[Row]:
        """Get (session_start, session_end) for every closed session."""
        result = await self.session.execute(
            select(NetworkSessionModel.session_start, NetworkSessionModel.session_end).where(
                NetworkSessionModel.session_end.is_not(None)
            )
        )
        return list(result.all())

    async def list_started_since(self, since: datetime) -> list[NetworkSessionModel]:
        """Get sessions started at or after the given time, newest first."""
        result = await self.session.execute(
            select(NetworkSessionModel)
            .where(NetworkSessionModel.session_start >= since)
            .order_by(NetworkSessionModel.session_start.desc())
        )
        return list(result.scalars().all())

    async def update(self, network_session: NetworkSessionModel) -> NetworkSessionModel:
        self.session.add(network_session)
        await self.session.flush()
        await self.session.refresh(network_session)
        return network_session

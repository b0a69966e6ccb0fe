"""Session ledger: records network session open and close events.

Sessions reference their user by email string. Listings join on that
string, so sessions whose user was deleted drop out of joined listings
while remaining in the table and in the totals.
"""

from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.core.logging import get_logger
from captiveportal.domain.entities import DailySessionStats, SessionListing, SessionStats
from captiveportal.infrastructure.persistence.models import NetworkSessionModel
from captiveportal.infrastructure.persistence.models.timestamps import (
    as_utc,
    to_utc,
    utc_now,
)
from captiveportal.infrastructure.persistence.repositories import (
    NetworkSessionRepository,
    SessionFilter,
)

logger = get_logger(__name__)


def _average_duration(intervals: list[tuple[datetime, datetime]]) -> float:
    if not intervals:
        return 0.0
    total = sum((as_utc(end) - as_utc(start)).total_seconds() for start, end in intervals)
    return total / len(intervals)


class SessionLedger:
    """Service recording and reporting on network sessions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the ledger.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.session_repo = NetworkSessionRepository(session)

    async def open_session(
        self,
        user_email: str,
        ip_address: str | None = None,
        mac_address: str | None = None,
        gateway_session_id: str | None = None,
    ) -> NetworkSessionModel:
        """Record a new open session.

        A user may hold several open sessions at once.
        """
        network_session = NetworkSessionModel(
            user_email=user_email,
            ip_address=ip_address,
            mac_address=mac_address,
            gateway_session_id=gateway_session_id,
            session_start=utc_now(),
            bytes_in=0,
            bytes_out=0,
        )
        await self.session_repo.create(network_session)
        await self.session.commit()
        await self.session.refresh(network_session)
        logger.info(
            "Session opened",
            session_id=network_session.id,
            user_email=user_email,
            ip_address=ip_address,
        )
        return network_session

    async def close_session(
        self,
        session_id: str,
        session_end: datetime | None = None,
        bytes_in: int | None = None,
        bytes_out: int | None = None,
    ) -> bool:
        """Close a session and optionally overwrite its byte counters.

        An already closed session keeps its original end time; counter
        updates are still applied.

        Args:
            session_id: Session to close.
            session_end: End time, defaults to now. Converted to UTC.
            bytes_in: New bytes_in value, if given.
            bytes_out: New bytes_out value, if given.

        Returns:
            False if no session has that id, True otherwise.
        """
        network_session = await self.session_repo.get_by_id(session_id)
        if network_session is None:
            logger.debug("Session not found for close", session_id=session_id)
            return False

        if network_session.session_end is None:
            network_session.session_end = to_utc(session_end) if session_end else utc_now()
        if bytes_in is not None:
            network_session.bytes_in = bytes_in
        if bytes_out is not None:
            network_session.bytes_out = bytes_out

        await self.session_repo.update(network_session)
        await self.session.commit()
        logger.info("Session closed", session_id=session_id)
        return True

    async def find_open_session_for_user(self, user_email: str) -> NetworkSessionModel | None:
        return await self.session_repo.find_open_for_user(user_email)

    async def get_session(self, session_id: str) -> NetworkSessionModel | None:
        return await self.session_repo.get_by_id(session_id)

    async def _list(
        self,
        filters: SessionFilter | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[SessionListing]:
        if filters is not None:
            filters = replace(
                filters,
                start=to_utc(filters.start) if filters.start else None,
                end=to_utc(filters.end) if filters.end else None,
            )
        rows = await self.session_repo.list_joined(filters, limit=limit, offset=offset)
        return [
            SessionListing(
                id=row[0].id,
                user_email=row[0].user_email,
                first_name=row.first_name,
                last_name=row.last_name,
                company=row.company,
                ip_address=row[0].ip_address,
                mac_address=row[0].mac_address,
                gateway_session_id=row[0].gateway_session_id,
                session_start=as_utc(row[0].session_start),
                session_end=as_utc(row[0].session_end) if row[0].session_end else None,
                bytes_in=row[0].bytes_in,
                bytes_out=row[0].bytes_out,
            )
            for row in rows
        ]

    async def list_sessions(
        self,
        page: int = 1,
        limit: int = 50,
        filters: SessionFilter | None = None,
    ) -> list[SessionListing]:
        """List joined sessions newest first, one page at a time."""
        page = max(page, 1)
        return await self._list(filters, limit=limit, offset=(page - 1) * limit)

    async def list_all_sessions(self) -> list[SessionListing]:
        return await self._list()

    async def list_by_user(self, user_email: str) -> list[SessionListing]:
        return await self._list(SessionFilter(user_email=user_email))

    async def list_by_ip(self, ip_address: str) -> list[SessionListing]:
        return await self._list(SessionFilter(ip_address=ip_address))

    async def list_by_date_range(self, start: datetime, end: datetime) -> list[SessionListing]:
        """List joined sessions whose start falls within [start, end]."""
        return await self._list(SessionFilter(start=start, end=end))

    async def list_active_sessions(self) -> list[SessionListing]:
        return await self._list(SessionFilter(active_only=True))

    async def list_sessions_for_user_raw(self, user_email: str) -> list[NetworkSessionModel]:
        """List a user's sessions without the user join."""
        return await self.session_repo.list_for_user(user_email)

    async def get_session_stats(self) -> SessionStats:
        """Totals over every session.

        The average duration covers closed sessions only and is 0 when
        there are none.
        """
        totals = await self.session_repo.get_totals()
        # Duration arithmetic differs between SQLite and PostgreSQL, so the
        # average is taken in Python over the closed intervals.
        intervals = await self.session_repo.list_closed_intervals()
        return SessionStats(
            total_sessions=totals.total_sessions or 0,
            active_sessions=totals.active_sessions or 0,
            total_bytes_in=int(totals.total_bytes_in or 0),
            total_bytes_out=int(totals.total_bytes_out or 0),
            avg_duration=_average_duration([(row[0], row[1]) for row in intervals]),
        )

    async def get_daily_stats(self, days: int = 7) -> list[DailySessionStats]:
        """Session statistics per UTC calendar day of session_start.

        Args:
            days: Size of the trailing window in days.

        Returns:
            One entry per day that has sessions, newest day first.
        """
        since = datetime.now(timezone.utc) - timedelta(days=days)
        sessions = await self.session_repo.list_started_since(since)

        by_day: dict[date, list[NetworkSessionModel]] = defaultdict(list)
        for network_session in sessions:
            by_day[as_utc(network_session.session_start).date()].append(network_session)

        return [
            DailySessionStats(
                day=day,
                total_sessions=len(group),
                active_sessions=sum(1 for s in group if s.session_end is None),
                total_bytes_in=sum(s.bytes_in for s in group),
                total_bytes_out=sum(s.bytes_out for s in group),
                avg_duration=_average_duration(
                    [(s.session_start, s.session_end) for s in group if s.session_end is not None]
                ),
            )
            for day, group in sorted(by_day.items(), reverse=True)
        ]

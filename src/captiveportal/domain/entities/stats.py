"""Aggregate statistics reported to the admin console."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class UserStats:
    """Counts over the user_accounts table.

    Attributes:
        total_users: Number of registered users.
        active_users: Users whose active flag is set.
        users_with_login: Users who have logged in at least once.
        recent_logins: Users whose last login is within the last 7 days.
    """

    total_users: int = 0
    active_users: int = 0
    users_with_login: int = 0
    recent_logins: int = 0


@dataclass(frozen=True)
class SessionStats:
    """Counts and totals over the user_sessions table.

    ``avg_duration`` is in seconds and only covers closed sessions.
    """

    total_sessions: int = 0
    active_sessions: int = 0
    total_bytes_in: int = 0
    total_bytes_out: int = 0
    avg_duration: float = 0.0


@dataclass(frozen=True)
class DailySessionStats(SessionStats):
    """Session statistics for one calendar day of session_start."""

    day: date | None = None

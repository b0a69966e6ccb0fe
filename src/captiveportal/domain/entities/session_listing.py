"""Session row joined with the owning user's display fields."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionListing:
    """A network session as shown in admin listings and reports."""

    id: str
    user_email: str
    first_name: str
    last_name: str
    company: str | None
    ip_address: str | None
    mac_address: str | None
    gateway_session_id: str | None
    session_start: datetime
    session_end: datetime | None
    bytes_in: int
    bytes_out: int

    @property
    def is_active(self) -> bool:
        return self.session_end is None

    @property
    def duration_seconds(self) -> float | None:
        """Length of a closed session in seconds, None while active."""
        if self.session_end is None:
            return None
        return (self.session_end - self.session_start).total_seconds()

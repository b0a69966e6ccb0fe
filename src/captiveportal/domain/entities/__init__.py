"""Domain entities for the captive portal.

Entities are plain dataclasses with no dependencies on infrastructure.
"""

from captiveportal.domain.entities.session_listing import SessionListing
from captiveportal.domain.entities.stats import DailySessionStats, SessionStats, UserStats
from captiveportal.domain.entities.updates import AdminUpdate, UserUpdate

__all__ = [
    "AdminUpdate",
    "DailySessionStats",
    "SessionListing",
    "SessionStats",
    "UserStats",
    "UserUpdate",
]

"""Pydantic schemas for session listings and statistics."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class SessionResponse(BaseModel):
    """A network session without user display fields."""

    id: str
    user_email: str
    ip_address: str | None = None
    mac_address: str | None = None
    gateway_session_id: str | None = None
    session_start: datetime
    session_end: datetime | None = None
    bytes_in: int = 0
    bytes_out: int = 0

    model_config = {"from_attributes": True}


class SessionListingResponse(SessionResponse):
    """A session joined with its user's name and company."""

    first_name: str
    last_name: str
    company: str | None = None


class SessionListResponse(BaseModel):
    success: bool = Field(True)
    sessions: list[SessionListingResponse]


class SessionUpdateRequest(BaseModel):
    """Admin close or counter update for a session."""

    model_config = ConfigDict(extra="forbid")

    session_end: datetime | None = None
    bytes_in: int | None = Field(None, ge=0)
    bytes_out: int | None = Field(None, ge=0)


class UserStatsResponse(BaseModel):
    total_users: int
    active_users: int
    users_with_login: int
    recent_logins: int

    model_config = {"from_attributes": True}


class SessionStatsResponse(BaseModel):
    total_sessions: int
    active_sessions: int
    total_bytes_in: int
    total_bytes_out: int
    avg_duration: float = Field(..., description="Average closed-session length in seconds")

    model_config = {"from_attributes": True}


class DailySessionStatsResponse(SessionStatsResponse):
    day: date = Field(..., serialization_alias="date")


class StatsResponse(BaseModel):
    success: bool = Field(True)
    user_stats: UserStatsResponse = Field(..., serialization_alias="userStats")
    session_stats: SessionStatsResponse = Field(..., serialization_alias="sessionStats")


class DailyStatsResponse(BaseModel):
    success: bool = Field(True)
    days: int
    stats: list[DailySessionStatsResponse]

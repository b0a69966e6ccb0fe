"""Pydantic schemas for the admin console endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from captiveportal.infrastructure.api.schemas.auth_schemas import UserResponse
from captiveportal.infrastructure.api.schemas.session_schemas import SessionResponse
from captiveportal.infrastructure.persistence.models import AdminRole


class AdminLoginRequest(BaseModel):
    """Request body for admin login."""

    username: str = Field(..., min_length=1, description="Admin username")
    password: str = Field(..., min_length=1, description="Admin password")


class AdminResponse(BaseModel):
    """Admin account as returned by the API. Never carries the password hash."""

    id: str
    username: str
    email: str
    role: str
    is_active: bool
    created_at: datetime | None = None
    last_login: datetime | None = None

    model_config = {"from_attributes": True}


class AdminAuthResponse(BaseModel):
    success: bool = Field(True)
    message: str
    token: str = Field(..., description="JWT bearer token")
    admin: AdminResponse


class AdminUserResponse(UserResponse):
    """Guest identity with the admin-only fields."""

    is_active: bool
    updated_at: datetime | None = None


class PaginationInfo(BaseModel):
    page: int = Field(..., description="Current page, 1-based")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Number of matching items")
    pages: int = Field(..., description="Number of pages")


class UserListResponse(BaseModel):
    success: bool = Field(True)
    users: list[AdminUserResponse]
    pagination: PaginationInfo


class UserDetailResponse(BaseModel):
    success: bool = Field(True)
    user: AdminUserResponse
    sessions: list[SessionResponse]


class UserUpdateRequest(BaseModel):
    """Request body for updating a guest.

    Only these fields can change. Any other key is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, min_length=2, max_length=100)
    last_name: str | None = Field(None, min_length=2, max_length=100)
    company: str | None = Field(None, min_length=2, max_length=200)
    is_active: bool | None = None


class UserUpdateResponse(BaseModel):
    success: bool = Field(True)
    message: str
    user: AdminUserResponse


class AdminCreateRequest(BaseModel):
    """Request body for creating an admin account."""

    username: str = Field(
        ..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.-]+$"
    )
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: AdminRole = Field(AdminRole.ADMIN)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class AdminUpdateRequest(BaseModel):
    """Request body for updating an admin account."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    role: AdminRole | None = None
    is_active: bool | None = None


class AdminPasswordRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    password: str = Field(..., min_length=8, max_length=128)


class AdminListResponse(BaseModel):
    success: bool = Field(True)
    admins: list[AdminResponse]


class AdminDetailResponse(BaseModel):
    success: bool = Field(True)
    message: str | None = None
    admin: AdminResponse


class SettingResponse(BaseModel):
    setting_key: str
    setting_value: str | None = None
    description: str | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class SettingListResponse(BaseModel):
    success: bool = Field(True)
    settings: list[SettingResponse]


class SettingUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    setting_value: str = Field(..., max_length=10000)
    description: str | None = None


class SettingUpdateResponse(BaseModel):
    success: bool = Field(True)
    message: str
    setting: SettingResponse


class PortalSettingsResponse(BaseModel):
    """Public portal settings keyed by setting name."""

    success: bool = Field(True)
    settings: dict[str, str]

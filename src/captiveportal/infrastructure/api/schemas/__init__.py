"""API schemas for request/response validation."""

from captiveportal.infrastructure.api.schemas.admin_schemas import (
    AdminAuthResponse,
    AdminCreateRequest,
    AdminDetailResponse,
    AdminListResponse,
    AdminLoginRequest,
    AdminPasswordRequest,
    AdminResponse,
    AdminUpdateRequest,
    AdminUserResponse,
    PaginationInfo,
    PortalSettingsResponse,
    SettingListResponse,
    SettingResponse,
    SettingUpdateRequest,
    SettingUpdateResponse,
    UserDetailResponse,
    UserListResponse,
    UserUpdateRequest,
    UserUpdateResponse,
)
from captiveportal.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)
from captiveportal.infrastructure.api.schemas.common import (
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    ValidationErrorDetail,
)
from captiveportal.infrastructure.api.schemas.session_schemas import (
    DailySessionStatsResponse,
    DailyStatsResponse,
    SessionListingResponse,
    SessionListResponse,
    SessionResponse,
    SessionStatsResponse,
    SessionUpdateRequest,
    StatsResponse,
    UserStatsResponse,
)

__all__ = [
    "AdminAuthResponse",
    "AdminCreateRequest",
    "AdminDetailResponse",
    "AdminListResponse",
    "AdminLoginRequest",
    "AdminPasswordRequest",
    "AdminResponse",
    "AdminUpdateRequest",
    "AdminUserResponse",
    "AuthResponse",
    "DailySessionStatsResponse",
    "DailyStatsResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PaginationInfo",
    "PortalSettingsResponse",
    "ProfileResponse",
    "RegisterRequest",
    "SessionListResponse",
    "SessionListingResponse",
    "SessionResponse",
    "SessionStatsResponse",
    "SessionUpdateRequest",
    "SettingListResponse",
    "SettingResponse",
    "SettingUpdateRequest",
    "SettingUpdateResponse",
    "StatsResponse",
    "UserDetailResponse",
    "UserListResponse",
    "UserResponse",
    "UserStatsResponse",
    "UserUpdateRequest",
    "UserUpdateResponse",
]

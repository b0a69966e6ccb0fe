"""Admin console API routes.

Every route except ``/login`` and ``/health`` requires an admin token.
Any admin role may use these routes; admin account management lives in
``admin_accounts_router`` and needs the super_admin role.
"""

import math
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Query, status

from captiveportal.core.logging import get_logger
from captiveportal.domain.entities import UserUpdate
from captiveportal.domain.exceptions import NotFoundError
from captiveportal.domain.services import AdminService, SessionLedger, UserService
from captiveportal.infrastructure.api.dependencies import (
    JWT,
    AuthenticatedAdmin,
    DbSession,
)
from captiveportal.infrastructure.api.schemas import (
    AdminAuthResponse,
    AdminLoginRequest,
    AdminResponse,
    AdminUserResponse,
    DailySessionStatsResponse,
    DailyStatsResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    PaginationInfo,
    SessionListingResponse,
    SessionListResponse,
    SessionResponse,
    SessionStatsResponse,
    SessionUpdateRequest,
    StatsResponse,
    UserDetailResponse,
    UserListResponse,
    UserStatsResponse,
    UserUpdateRequest,
    UserUpdateResponse,
)
from captiveportal.infrastructure.persistence.repositories import SessionFilter

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=AdminAuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def admin_login(
    body: AdminLoginRequest,
    session: DbSession,
    jwt_service: JWT,
) -> AdminAuthResponse:
    admin = await AdminService(session).authenticate_admin(body.username, body.password)
    token = jwt_service.create_admin_token(
        admin_id=admin.id,
        username=admin.username,
        role=admin.role,
    )
    return AdminAuthResponse(
        message="Admin login successful",
        token=token,
        admin=AdminResponse.model_validate(admin),
    )


@router.get("/users", response_model=UserListResponse)
async def list_users(
    current_admin: AuthenticatedAdmin,
    session: DbSession,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=1000)] = 50,
    search: Annotated[str | None, Query(max_length=200)] = None,
) -> UserListResponse:
    """List guests newest first, filtered by ``search`` and then paginated."""
    users = await UserService(session).list_users(search=search)
    total = len(users)
    offset = (page - 1) * limit

    return UserListResponse(
        users=[AdminUserResponse.model_validate(user) for user in users[offset : offset + limit]],
        pagination=PaginationInfo(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


@router.get(
    "/users/{identifier}",
    response_model=UserDetailResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(
    identifier: str,
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> UserDetailResponse:
    """Get a guest by id or email, with all of their sessions."""
    user = await UserService(session).get_user_by_identifier(identifier)
    sessions = await SessionLedger(session).list_sessions_for_user_raw(user.email)
    return UserDetailResponse(
        user=AdminUserResponse.model_validate(user),
        sessions=[SessionResponse.model_validate(s) for s in sessions],
    )


@router.put(
    "/users/{identifier}",
    response_model=UserUpdateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No or unknown fields"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def update_user(
    identifier: str,
    body: UserUpdateRequest,
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> UserUpdateResponse:
    service = UserService(session)
    user = await service.get_user_by_identifier(identifier)
    user = await service.update_user(
        user.id,
        UserUpdate(**body.model_dump(exclude_unset=True)),
    )
    logger.info("User updated by admin", user_id=user.id, admin_id=current_admin.admin_id)
    return UserUpdateResponse(
        message="User updated successfully",
        user=AdminUserResponse.model_validate(user),
    )


@router.delete(
    "/users/{identifier}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def delete_user(
    identifier: str,
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> MessageResponse:
    service = UserService(session)
    user = await service.get_user_by_identifier(identifier)
    await service.delete_user(user.id)
    logger.info("User deleted by admin", user_id=user.id, admin_id=current_admin.admin_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/stats", response_model=StatsResponse)
async def get_stats(current_admin: AuthenticatedAdmin, session: DbSession) -> StatsResponse:
    user_stats = await UserService(session).get_user_stats()
    session_stats = await SessionLedger(session).get_session_stats()
    return StatsResponse(
        user_stats=UserStatsResponse.model_validate(user_stats),
        session_stats=SessionStatsResponse.model_validate(session_stats),
    )


@router.get("/stats/daily", response_model=DailyStatsResponse)
async def get_daily_stats(
    current_admin: AuthenticatedAdmin,
    session: DbSession,
    days: Annotated[int, Query(ge=1, le=365)] = 7,
) -> DailyStatsResponse:
    stats = await SessionLedger(session).get_daily_stats(days=days)
    return DailyStatsResponse(
        days=days,
        stats=[DailySessionStatsResponse.model_validate(day) for day in stats],
    )


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(
    current_admin: AuthenticatedAdmin,
    session: DbSession,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=1000)] = 50,
    email: Annotated[str | None, Query()] = None,
    ip: Annotated[str | None, Query()] = None,
    start: Annotated[datetime | None, Query()] = None,
    end: Annotated[datetime | None, Query()] = None,
) -> SessionListResponse:
    """List sessions joined with their users, newest first.

    Sessions whose user was deleted are not listed.
    """
    filters = SessionFilter(
        user_email=email.strip().lower() if email else None,
        ip_address=ip,
        start=start,
        end=end,
    )
    listings = await SessionLedger(session).list_sessions(page=page, limit=limit, filters=filters)
    return SessionListResponse(
        sessions=[SessionListingResponse.model_validate(listing) for listing in listings]
    )


@router.get("/sessions/active", response_model=SessionListResponse)
async def list_active_sessions(
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> SessionListResponse:
    listings = await SessionLedger(session).list_active_sessions()
    return SessionListResponse(
        sessions=[SessionListingResponse.model_validate(listing) for listing in listings]
    )


@router.put(
    "/sessions/{session_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
async def update_session(
    session_id: str,
    body: SessionUpdateRequest,
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> MessageResponse:
    """Close a session and optionally set its byte counters.

    A session that is already closed keeps its end time.
    """
    closed = await SessionLedger(session).close_session(
        session_id,
        session_end=body.session_end,
        bytes_in=body.bytes_in,
        bytes_out=body.bytes_out,
    )
    if not closed:
        raise NotFoundError("Session")

    logger.info("Session updated by admin", session_id=session_id, admin_id=current_admin.admin_id)
    return MessageResponse(message="Session ended successfully")


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def admin_health() -> HealthResponse:
    return HealthResponse(
        message="Admin service is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

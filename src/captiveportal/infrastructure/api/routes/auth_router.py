"""Captive-portal guest API routes.

Provides registration, login (which opens a network session), profile and
logout (which closes it).
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status

from captiveportal.core.logging import get_logger
from captiveportal.domain.services import SessionLedger, UserService
from captiveportal.infrastructure.api.client_address import client_ip
from captiveportal.infrastructure.api.dependencies import JWT, AuthenticatedUser, DbSession
from captiveportal.infrastructure.api.schemas import (
    AuthResponse,
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter()

MAC_HEADER = "X-MAC-Address"
GATEWAY_SESSION_HEADERS = ("X-Gateway-Session", "X-Mikrotik-Session")


def gateway_session_id(request: Request) -> str | None:
    for header in GATEWAY_SESSION_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return None


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse, "description": "Validation error or duplicate"}},
)
async def register(
    body: RegisterRequest,
    session: DbSession,
    jwt_service: JWT,
) -> AuthResponse:
    """Register a guest and return a token.

    No network session is opened until the guest logs in.
    """
    user = await UserService(session).register_user(
        email=body.email,
        phone_number=body.phone_number,
        first_name=body.first_name,
        last_name=body.last_name,
        company=body.company,
    )
    token = jwt_service.create_user_token(user_id=user.id, email=user.email)

    return AuthResponse(
        message="Registration successful! You can now login with your email and phone number.",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def login(
    body: LoginRequest,
    request: Request,
    session: DbSession,
    jwt_service: JWT,
) -> AuthResponse:
    """Authenticate a guest by email and phone and open a network session."""
    user = await UserService(session).authenticate_user(body.email, body.phone_number)

    network_session = await SessionLedger(session).open_session(
        user_email=user.email,
        ip_address=client_ip(request),
        mac_address=request.headers.get(MAC_HEADER),
        gateway_session_id=gateway_session_id(request),
    )
    logger.info("Network access granted", user_id=user.id, session_id=network_session.id)

    token = jwt_service.create_user_token(user_id=user.id, email=user.email)
    return AuthResponse(
        message="Login successful! You now have internet access.",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/profile", response_model=ProfileResponse)
async def profile(current_user: AuthenticatedUser, session: DbSession) -> ProfileResponse:
    user = await UserService(session).get_user_by_email(current_user.email)
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: AuthenticatedUser, session: DbSession) -> MessageResponse:
    """Close the caller's most recent open session, if there is one."""
    ledger = SessionLedger(session)
    open_session = await ledger.find_open_session_for_user(current_user.email)
    if open_session is not None:
        await ledger.close_session(open_session.id)
    else:
        logger.debug("Logout without an open session", user_id=current_user.user_id)

    return MessageResponse(message="Logout successful")


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        message="Authentication service is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

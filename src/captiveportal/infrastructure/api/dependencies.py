"""FastAPI dependencies for authentication and authorization.

The JWT service and settings live on the application state, placed there
by ``create_app``; nothing here reads module-level singletons.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.core.config import Settings
from captiveportal.core.logging import get_logger
from captiveportal.infrastructure.auth import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)
from captiveportal.infrastructure.persistence.database import get_db_session
from captiveportal.infrastructure.persistence.models import AdminRole

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """Guest identity extracted from a valid user token."""

    user_id: str
    email: str


@dataclass
class CurrentAdmin:
    """Admin identity extracted from a valid admin token."""

    admin_id: str
    username: str
    role: str

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.SUPER_ADMIN.value


def get_settings_from_state(request: Request) -> Settings:
    return request.app.state.settings


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _extract_bearer_token(authorization: str | None, missing_message: str) -> str:
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise _unauthorized(missing_message)

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise _unauthorized(missing_message)

    return parts[1]


async def get_current_user(
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current guest from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or not
            a user token.
    """
    token = _extract_bearer_token(authorization, "Access token required")

    try:
        payload = jwt_service.validate_user_token(token)
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise _unauthorized("Invalid or expired token")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise _unauthorized("Invalid or expired token")

    return CurrentUser(user_id=payload["user_id"], email=payload.get("email", ""))


async def get_current_admin(
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentAdmin:
    """Extract and validate the current admin from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or not
            an admin token.
    """
    token = _extract_bearer_token(authorization, "Admin token required")

    try:
        payload = jwt_service.validate_admin_token(token)
    except TokenExpiredError:
        logger.info("Admin authentication failed: token expired")
        raise _unauthorized("Invalid or expired admin token")
    except InvalidTokenError as e:
        logger.info("Admin authentication failed: invalid token", error=str(e))
        raise _unauthorized("Invalid or expired admin token")

    return CurrentAdmin(
        admin_id=payload["admin_id"],
        username=payload.get("username", ""),
        role=payload.get("role", AdminRole.ADMIN.value),
    )


async def require_super_admin(
    current_admin: Annotated[CurrentAdmin, Depends(get_current_admin)],
) -> CurrentAdmin:
    """Ensure the current admin holds the super_admin role.

    Raises:
        HTTPException: 403 if the admin is not a super admin.
    """
    if not current_admin.is_super_admin:
        logger.info(
            "Super admin access denied",
            admin_id=current_admin.admin_id,
            role=current_admin.role,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super admin access required",
        )
    return current_admin


# Type aliases for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
AuthenticatedAdmin = Annotated[CurrentAdmin, Depends(get_current_admin)]
SuperAdmin = Annotated[CurrentAdmin, Depends(require_super_admin)]
JWT = Annotated[JWTService, Depends(get_jwt_service)]

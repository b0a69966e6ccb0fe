"""Admin account management routes.

Creating, changing and deleting admin accounts needs the super_admin role.
An admin may always change their own password.
"""

from fastapi import APIRouter, HTTPException, status

from captiveportal.core.logging import get_logger
from captiveportal.domain.entities import AdminUpdate
from captiveportal.domain.services import AdminService
from captiveportal.infrastructure.api.dependencies import (
    AuthenticatedAdmin,
    DbSession,
    SuperAdmin,
)
from captiveportal.infrastructure.api.schemas import (
    AdminCreateRequest,
    AdminDetailResponse,
    AdminListResponse,
    AdminPasswordRequest,
    AdminResponse,
    AdminUpdateRequest,
    ErrorResponse,
    MessageResponse,
)
from captiveportal.infrastructure.persistence.models import AdminRole

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=AdminListResponse)
async def list_admins(current_admin: SuperAdmin, session: DbSession) -> AdminListResponse:
    admins = await AdminService(session).list_admins()
    return AdminListResponse(admins=[AdminResponse.model_validate(a) for a in admins])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AdminDetailResponse,
    responses={400: {"model": ErrorResponse, "description": "Duplicate username or email"}},
)
async def create_admin(
    body: AdminCreateRequest,
    current_admin: SuperAdmin,
    session: DbSession,
) -> AdminDetailResponse:
    admin = await AdminService(session).create_admin(
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    logger.info("Admin created via API", admin_id=admin.id, created_by=current_admin.admin_id)
    return AdminDetailResponse(
        message="Admin created successfully",
        admin=AdminResponse.model_validate(admin),
    )


@router.put(
    "/{admin_id}",
    response_model=AdminDetailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Cannot demote or deactivate yourself"},
        404: {"model": ErrorResponse, "description": "Admin not found"},
    },
)
async def update_admin(
    admin_id: str,
    body: AdminUpdateRequest,
    current_admin: SuperAdmin,
    session: DbSession,
) -> AdminDetailResponse:
    if admin_id == current_admin.admin_id and (
        body.is_active is False
        or (body.role is not None and body.role != AdminRole.SUPER_ADMIN)
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot demote or deactivate your own account",
        )

    admin = await AdminService(session).update_admin(
        admin_id,
        AdminUpdate(**body.model_dump(exclude_none=True, mode="json")),
    )
    return AdminDetailResponse(
        message="Admin updated successfully",
        admin=AdminResponse.model_validate(admin),
    )


@router.put(
    "/{admin_id}/password",
    response_model=MessageResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not allowed"},
        404: {"model": ErrorResponse, "description": "Admin not found"},
    },
)
async def change_admin_password(
    admin_id: str,
    body: AdminPasswordRequest,
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> MessageResponse:
    if admin_id != current_admin.admin_id and not current_admin.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super admin access required",
        )

    await AdminService(session).update_admin_password(admin_id, body.password)
    return MessageResponse(message="Password updated successfully")


@router.delete(
    "/{admin_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Cannot delete yourself"},
        404: {"model": ErrorResponse, "description": "Admin not found"},
    },
)
async def delete_admin(
    admin_id: str,
    current_admin: SuperAdmin,
    session: DbSession,
) -> MessageResponse:
    if admin_id == current_admin.admin_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account",
        )

    await AdminService(session).delete_admin(admin_id)
    logger.info("Admin deleted via API", admin_id=admin_id, deleted_by=current_admin.admin_id)
    return MessageResponse(message="Admin deleted successfully")

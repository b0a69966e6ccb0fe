"""System settings routes.

The portal page reads the settings anonymously; admins can list and
change them.
"""

from fastapi import APIRouter

from captiveportal.core.logging import get_logger
from captiveportal.domain.services import SettingsService
from captiveportal.infrastructure.api.dependencies import AuthenticatedAdmin, DbSession
from captiveportal.infrastructure.api.schemas import (
    ErrorResponse,
    PortalSettingsResponse,
    SettingListResponse,
    SettingResponse,
    SettingUpdateRequest,
    SettingUpdateResponse,
)

logger = get_logger(__name__)

portal_router = APIRouter()
admin_settings_router = APIRouter()


@portal_router.get("/settings", response_model=PortalSettingsResponse)
async def portal_settings(session: DbSession) -> PortalSettingsResponse:
    settings = await SettingsService(session).get_settings_map()
    return PortalSettingsResponse(settings=settings)


@admin_settings_router.get("", response_model=SettingListResponse)
async def list_settings(current_admin: AuthenticatedAdmin, session: DbSession) -> SettingListResponse:
    settings = await SettingsService(session).list_settings()
    return SettingListResponse(settings=[SettingResponse.model_validate(s) for s in settings])


@admin_settings_router.put(
    "/{setting_key}",
    response_model=SettingUpdateResponse,
    responses={404: {"model": ErrorResponse, "description": "Setting not found"}},
)
async def update_setting(
    setting_key: str,
    body: SettingUpdateRequest,
    current_admin: AuthenticatedAdmin,
    session: DbSession,
) -> SettingUpdateResponse:
    setting = await SettingsService(session).update_setting(
        setting_key,
        body.setting_value,
        description=body.description,
    )
    logger.info("Setting changed by admin", setting_key=setting_key, admin_id=current_admin.admin_id)
    return SettingUpdateResponse(
        message="Setting updated successfully",
        setting=SettingResponse.model_validate(setting),
    )

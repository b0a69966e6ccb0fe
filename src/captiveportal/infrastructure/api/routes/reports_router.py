"""CSV report downloads for the admin console."""

from fastapi import APIRouter, Response

from captiveportal.core.logging import get_logger
from captiveportal.domain.services import (
    SessionLedger,
    UserService,
    render_sessions_csv,
    render_users_csv,
    report_filename,
)
from captiveportal.infrastructure.api.dependencies import AuthenticatedAdmin, DbSession

logger = get_logger(__name__)

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv"


def _csv_response(content: str, kind: str) -> Response:
    headers = {"Content-Disposition": f"attachment; filename={report_filename(kind)}"}
    return Response(content=content, media_type=CSV_MEDIA_TYPE, headers=headers)


@router.get(
    "/users",
    responses={200: {"content": {"text/csv": {}}, "description": "Users report"}},
)
async def users_report(current_admin: AuthenticatedAdmin, session: DbSession) -> Response:
    """Download every guest as CSV."""
    users = await UserService(session).list_users()
    logger.info("Users report generated", admin_id=current_admin.admin_id, rows=len(users))
    return _csv_response(render_users_csv(users), "users")


@router.get(
    "/sessions",
    responses={200: {"content": {"text/csv": {}}, "description": "Sessions report"}},
)
async def sessions_report(current_admin: AuthenticatedAdmin, session: DbSession) -> Response:
    """Download every session of an existing guest as CSV."""
    listings = await SessionLedger(session).list_all_sessions()
    logger.info("Sessions report generated", admin_id=current_admin.admin_id, rows=len(listings))
    return _csv_response(render_sessions_csv(listings), "sessions")

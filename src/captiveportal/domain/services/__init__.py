"""Domain services for the captive portal.

Services hold the business rules and talk to the database through the
repositories.
"""

from captiveportal.domain.services.admin_service import AdminService
from captiveportal.domain.services.phone_number import (
    is_valid_phone_number,
    normalize_phone_number,
)
from captiveportal.domain.services.report_service import (
    render_sessions_csv,
    render_users_csv,
    report_filename,
)
from captiveportal.domain.services.session_ledger import SessionLedger
from captiveportal.domain.services.settings_service import DEFAULT_SETTINGS, SettingsService
from captiveportal.domain.services.user_service import UserService

__all__ = [
    "AdminService",
    "DEFAULT_SETTINGS",
    "SessionLedger",
    "SettingsService",
    "UserService",
    "is_valid_phone_number",
    "normalize_phone_number",
    "render_sessions_csv",
    "render_users_csv",
    "report_filename",
]

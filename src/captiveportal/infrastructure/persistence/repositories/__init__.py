"""Repository classes wrapping database access for each table."""

from captiveportal.infrastructure.persistence.repositories.admin_account_repository import (
    AdminAccountRepository,
)
from captiveportal.infrastructure.persistence.repositories.network_session_repository import (
    NetworkSessionRepository,
    SessionFilter,
)
from captiveportal.infrastructure.persistence.repositories.system_setting_repository import (
    SystemSettingRepository,
)
from captiveportal.infrastructure.persistence.repositories.user_account_repository import (
    UserAccountRepository,
)

__all__ = [
    "AdminAccountRepository",
    "NetworkSessionRepository",
    "SessionFilter",
    "SystemSettingRepository",
    "UserAccountRepository",
]

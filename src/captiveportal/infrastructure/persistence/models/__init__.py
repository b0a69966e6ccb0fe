"""SQLAlchemy models for the captive portal tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from captiveportal.infrastructure.persistence.models.admin_account import (
    AdminAccountModel,
    AdminRole,
)
from captiveportal.infrastructure.persistence.models.network_session import (
    NetworkSessionModel,
)
from captiveportal.infrastructure.persistence.models.system_setting import (
    SystemSettingModel,
)
from captiveportal.infrastructure.persistence.models.user_account import UserAccountModel

__all__ = [
    "AdminAccountModel",
    "AdminRole",
    "NetworkSessionModel",
    "SystemSettingModel",
    "UserAccountModel",
]

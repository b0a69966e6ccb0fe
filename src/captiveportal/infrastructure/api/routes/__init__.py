"""API route modules."""

from captiveportal.infrastructure.api.routes.admin_accounts_router import (
    router as admin_accounts_router,
)
from captiveportal.infrastructure.api.routes.admin_router import router as admin_router
from captiveportal.infrastructure.api.routes.auth_router import router as auth_router
from captiveportal.infrastructure.api.routes.reports_router import router as reports_router
from captiveportal.infrastructure.api.routes.settings_router import (
    admin_settings_router,
    portal_router,
)

__all__ = [
    "admin_accounts_router",
    "admin_router",
    "admin_settings_router",
    "auth_router",
    "portal_router",
    "reports_router",
]

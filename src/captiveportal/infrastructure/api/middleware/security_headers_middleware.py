"""Security headers middleware.

Adds browser security headers to every response and, in production,
redirects plain HTTP to HTTPS when configured to.
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import RedirectResponse

from captiveportal.core.config import Settings
from captiveportal.core.logging import get_logger

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: Prevents MIME type sniffing
    - X-Frame-Options: Prevents clickjacking
    - X-XSS-Protection: Legacy browser XSS filter
    - Strict-Transport-Security: Production only
    - Content-Security-Policy
    - Permissions-Policy
    - Referrer-Policy
    """

    def __init__(self, app, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        settings = self.settings

        if not settings.security_headers_enabled:
            return await call_next(request)

        if (
            settings.is_production
            and settings.https_redirect_enabled
            and request.url.scheme == "http"
        ):
            https_url = request.url.replace(scheme="https")
            logger.info(
                "Redirecting HTTP to HTTPS",
                original_url=str(request.url),
                redirect_url=str(https_url),
            )
            return RedirectResponse(url=str(https_url), status_code=301)

        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"

        if settings.is_production:
            response.headers["Strict-Transport-Security"] = (
                f"max-age={settings.hsts_max_age}; includeSubDomains"
            )

        response.headers["Content-Security-Policy"] = settings.csp_policy
        response.headers["Permissions-Policy"] = settings.permissions_policy
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response

"""Rate limiting middleware.

Limits the number of requests a single client IP can make per minute.
Disabled unless ``rate_limit_enabled`` is set.
"""

import math

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from captiveportal.core.config import Settings
from captiveportal.core.logging import get_logger
from captiveportal.infrastructure.api.client_address import client_ip
from captiveportal.infrastructure.api.middleware.rate_limit_storage import RateLimitStorage

logger = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce per-IP rate limits on API requests."""

    def __init__(self, app, settings: Settings, storage: RateLimitStorage | None = None) -> None:
        super().__init__(app)
        self.settings = settings
        self.storage = storage or RateLimitStorage()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request and enforce rate limits.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response from the application or a 429 error.
        """
        if not self.settings.rate_limit_enabled:
            return await call_next(request)

        key = f"ip:{client_ip(request) or 'unknown'}"
        rate = self.settings.rate_limit_per_minute

        is_allowed, remaining, reset_seconds = self.storage.consume(
            key, rate, burst=self.settings.rate_limit_burst
        )
        retry_after = str(max(1, math.ceil(reset_seconds)))

        if not is_allowed:
            logger.warning(
                "Rate limit exceeded",
                key=key,
                path=request.url.path,
                rate=rate,
                retry_after=retry_after,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "message": "Too many requests from this IP, please try again later.",
                },
                headers={
                    "Retry-After": retry_after,
                    "X-RateLimit-Limit": str(rate),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": retry_after,
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(rate)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(int(reset_seconds))

        return response

"""HTTP middleware for the captive portal API."""

from captiveportal.infrastructure.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
)
from captiveportal.infrastructure.api.middleware.rate_limit_storage import RateLimitStorage
from captiveportal.infrastructure.api.middleware.request_logging_middleware import (
    RequestLoggingMiddleware,
)
from captiveportal.infrastructure.api.middleware.security_headers_middleware import (
    SecurityHeadersMiddleware,
)

__all__ = [
    "RateLimitMiddleware",
    "RateLimitStorage",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]

"""Request logging middleware with correlation IDs."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from captiveportal.core.logging import (
    bind_correlation_id,
    clear_context,
    get_logger,
    new_correlation_id,
)

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request and echo its correlation ID back to the client."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            clear_context()

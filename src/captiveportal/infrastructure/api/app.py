"""FastAPI application factory and configuration.

``create_app`` builds the settings-dependent services (database manager
and JWT service), stores them on ``app.state`` and wires middleware,
routes and exception handlers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from captiveportal.core.config import Settings, get_settings
from captiveportal.core.logging import configure_logging, get_logger
from captiveportal.domain.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    NotFoundError,
    PortalError,
    ValidationFailedError,
)
from captiveportal.infrastructure.api.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from captiveportal.infrastructure.auth import JWTService
from captiveportal.infrastructure.persistence.database import DatabaseManager, init_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Initializes the database on startup and disposes the engine on shutdown.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info(
        "Starting captive portal",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database(app.state.db)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down captive portal")
    await app.state.db.disconnect()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Loaded from the environment when
            not given.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Captive portal registration, login and admin console API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = DatabaseManager(settings)
    app.state.jwt_service = JWTService(
        secret_key=settings.secret_key,
        expire_hours=settings.token_expire_hours,
    )

    register_middleware(app, settings)
    register_health_check(app, settings)
    register_routes(app, settings)
    register_exception_handlers(app, settings)

    return app


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware. The last one added runs first.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.add_middleware(RateLimitMiddleware, settings=settings)
    app.add_middleware(SecurityHeadersMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)


def register_health_check(app: FastAPI, settings: Settings) -> None:
    """Register the application-level health endpoint."""

    @app.get(f"{settings.api_prefix}/health", tags=["health"])
    async def health_check():
        """Liveness check. Does not touch the database."""
        return {
            "success": True,
            "message": "Captive portal API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
        }


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    from captiveportal.infrastructure.api.routes import (
        admin_accounts_router,
        admin_router,
        admin_settings_router,
        auth_router,
        portal_router,
        reports_router,
    )

    prefix = settings.api_prefix

    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(portal_router, prefix=f"{prefix}/portal", tags=["portal"])
    app.include_router(
        reports_router, prefix=f"{prefix}/admin/reports", tags=["admin-reports"]
    )
    app.include_router(
        admin_settings_router, prefix=f"{prefix}/admin/settings", tags=["admin-settings"]
    )
    app.include_router(
        admin_accounts_router, prefix=f"{prefix}/admin/admins", tags=["admin-accounts"]
    )
    app.include_router(admin_router, prefix=f"{prefix}/admin", tags=["admin"])


def _error_body(message: str, errors: list[dict] | None = None) -> dict:
    body: dict = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return body


def _field_from_location(location: tuple) -> str:
    if not location:
        return "request"
    parts = [str(part) for part in location if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or str(location[0])


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map domain and framework exceptions to ``{success: false, ...}`` responses.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": _field_from_location(tuple(error.get("loc", ()))),
                "message": error.get("msg", "Invalid value"),
                "code": error.get("type"),
            }
            for error in exc.errors()
        ]
        logger.info(
            "Request validation failed",
            path=request.url.path,
            fields=[error["field"] for error in errors],
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Validation failed", errors),
        )

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        errors = None
        if exc.field is not None:
            errors = [{"field": exc.field, "message": exc.message, "code": exc.code}]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(exc.message, errors),
        )

    @app.exception_handler(DuplicateResourceError)
    async def duplicate_handler(request: Request, exc: DuplicateResourceError):
        logger.info("Duplicate resource rejected", path=request.url.path, field=exc.field)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(exc.message),
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=_error_body(exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(exc.message),
        )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(exc.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = "Endpoint not found"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        body = _error_body("Internal server error")
        if settings.debug:
            body["error"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


# Create the application instance
app = create_app()

"""Configuration management for the captive portal.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CAPTIVEPORTAL_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Captive Portal"
    app_version: str = "1.0.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/captiveportal.db"
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Token Settings
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Secret key for JWT token signing",
    )
    token_expire_hours: int = 24

    # CORS Settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"]
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    cors_allow_headers: list[str] = Field(default=["Content-Type", "Authorization"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Rate Limiting Settings
    rate_limit_enabled: bool = False
    rate_limit_per_minute: int = 100
    rate_limit_burst: int = 100

    # Security Headers Settings
    security_headers_enabled: bool = True
    https_redirect_enabled: bool = False
    hsts_max_age: int = 31536000
    csp_policy: str = (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
        "font-src 'self' https://fonts.gstatic.com; "
        "script-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:"
    )
    permissions_policy: str = "geolocation=(), microphone=(), camera=()"

    # Bootstrap admin, auto-created on startup when all three are set
    bootstrap_admin_username: str | None = None
    bootstrap_admin_email: str | None = None
    bootstrap_admin_password: str | None = None

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse a list from a comma-separated string or list."""
        if isinstance(v, str) and not v.lstrip().startswith("["):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def has_bootstrap_admin(self) -> bool:
        """Whether a bootstrap admin is fully configured."""
        return bool(
            self.bootstrap_admin_username
            and self.bootstrap_admin_email
            and self.bootstrap_admin_password
        )

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for migrations."""
        url = self.database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once at startup and reused afterwards.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()

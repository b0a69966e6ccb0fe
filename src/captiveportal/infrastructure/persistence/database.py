"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from captiveportal.core.config import Settings
from captiveportal.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine (and therefore the connection pool) and the
    session factory. One instance is created per application.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize the database manager.

        Args:
            settings: Application settings holding the database URL and pool options.
        """
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.settings.database_url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine.

        Returns:
            AsyncEngine: SQLAlchemy async engine instance.
        """
        if self._engine is None:
            if self.is_sqlite:
                # SQLite uses a single-file pool, pool sizing does not apply
                self._engine = create_async_engine(
                    self.settings.database_url,
                    echo=self.settings.db_echo,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_async_engine(
                    self.settings.database_url,
                    echo=self.settings.db_echo,
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables.

        Used on startup in development. In production, use migrations instead.
        """
        # Models must be imported so they register with Base.metadata
        from captiveportal.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope for database operations.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserAccountModel))
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get a database session.

    The database manager is read from the application state, where
    ``create_app`` placed it.

    Yields:
        AsyncSession: SQLAlchemy async session.
    """
    db: DatabaseManager = request.app.state.db
    async with db.session() as session:
        yield session


async def init_database(db: DatabaseManager) -> None:
    """Initialize the database.

    Creates tables in development mode, seeds the default system settings
    and creates the bootstrap admin when one is configured.

    Args:
        db: Database manager instance.
    """
    settings = db.settings

    if db.is_sqlite and ":memory:" not in settings.database_url:
        db_path = Path(settings.database_url.split(":///")[-1])
        db_path.parent.mkdir(parents=True, exist_ok=True)

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.is_development:
        logger.info("Development mode: Creating database tables")
        await db.create_tables()
    else:
        logger.info("Skipping auto-create, use migrations")

    await _seed_system_settings(db)
    await _create_bootstrap_admin(db)


async def _seed_system_settings(db: DatabaseManager) -> None:
    """Insert default portal settings that are not present yet."""
    from captiveportal.domain.services.settings_service import SettingsService

    async with db.session() as session:
        created = await SettingsService(session).seed_defaults()
    if created:
        logger.info("Seeded default system settings", count=created)


async def _create_bootstrap_admin(db: DatabaseManager) -> None:
    """Create the configured bootstrap super admin if no super admin exists."""
    from captiveportal.domain.exceptions import DuplicateResourceError
    from captiveportal.domain.services.admin_service import AdminService
    from captiveportal.infrastructure.persistence.models import AdminRole

    settings = db.settings
    if not settings.has_bootstrap_admin:
        logger.debug("Bootstrap admin not configured, skipping")
        return

    async with db.session() as session:
        service = AdminService(session)
        if await service.has_super_admin():
            logger.info("Super admin already exists, skipping bootstrap")
            return
        try:
            admin = await service.create_admin(
                username=settings.bootstrap_admin_username,
                email=settings.bootstrap_admin_email,
                password=settings.bootstrap_admin_password,
                role=AdminRole.SUPER_ADMIN,
            )
        except DuplicateResourceError as e:
            # Do not block startup on a conflicting bootstrap account
            logger.error("Failed to create bootstrap admin", error=e.message)
            return

    logger.info("Bootstrap admin created", admin_id=admin.id, username=admin.username)

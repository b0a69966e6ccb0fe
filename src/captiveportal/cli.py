"""Command-line interface for the captive portal.

Provides commands to run the server, initialize the database and create
admin accounts.
"""

import asyncio

import click

from captiveportal import __version__
from captiveportal.core.config import get_settings
from captiveportal.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="captiveportal")
def cli() -> None:
    """Captive portal access-control service.

    Settings are read from CAPTIVEPORTAL_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting captive portal server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "captiveportal.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the tables, seed default settings and the bootstrap admin.

    In production, use the Alembic migrations instead.
    """
    from captiveportal.infrastructure.persistence.database import (
        DatabaseManager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm("This will create all database tables. Continue?", abort=True, default=False)

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await db.create_tables()
            await init_database(db)
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command("create-admin")
@click.option("--username", type=str, default=None, help="Admin username (prompts if omitted)")
@click.option("--email", type=str, default=None, help="Admin email (prompts if omitted)")
@click.option("--password", type=str, default=None, help="Admin password (prompts if omitted)")
@click.option(
    "--role",
    type=click.Choice(["admin", "super_admin"]),
    default="admin",
    show_default=True,
    help="Admin role",
)
def create_admin(
    username: str | None,
    email: str | None,
    password: str | None,
    role: str,
) -> None:
    """Create an admin console account."""
    from captiveportal.domain.exceptions import PortalError
    from captiveportal.domain.services import AdminService
    from captiveportal.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if username is None:
        username = click.prompt("Admin username", type=str)
    if not 3 <= len(username) <= 30:
        click.echo("Error: Username must be between 3 and 30 characters", err=True)
        raise SystemExit(1)

    if email is None:
        email = click.prompt("Admin email", type=str)
    if "@" not in email or "." not in email.split("@")[-1]:
        click.echo("Error: Invalid email format", err=True)
        raise SystemExit(1)

    if password is None:
        password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)
    if len(password) < 8:
        click.echo("Error: Password must be at least 8 characters", err=True)
        raise SystemExit(1)

    async def create() -> None:
        db = DatabaseManager(settings)
        try:
            async with db.session() as session:
                admin = await AdminService(session).create_admin(
                    username=username,
                    email=email,
                    password=password,
                    role=role,
                )
            click.echo(
                f"\nAdmin created successfully!\n"
                f"  Admin ID: {admin.id}\n"
                f"  Username: {admin.username}\n"
                f"  Role:     {admin.role}\n"
            )
            logger.info("Admin created via CLI", admin_id=admin.id, username=admin.username)
        except PortalError as e:
            click.echo(f"Error: {e.message}", err=True)
            raise SystemExit(1)
        finally:
            await db.disconnect()

    asyncio.run(create())


@cli.command()
def info() -> None:
    """Display configuration."""
    from sqlalchemy.engine import make_url

    settings = get_settings()
    database_url = make_url(settings.database_url).render_as_string(hide_password=True)

    click.echo(f"""
Captive Portal v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.token_expire_hours} hours
  Rate Limit:   {"on" if settings.rate_limit_enabled else "off"}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the ``captiveportal`` command."""
    cli()


if __name__ == "__main__":
    main()

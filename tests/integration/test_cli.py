"""Integration tests for the captiveportal command-line interface."""

import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from captiveportal import __version__
from captiveportal.cli import cli
from captiveportal.core.config import get_settings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_env(tmp_path):
    env = {
        "CAPTIVEPORTAL_ENVIRONMENT": "development",
        "CAPTIVEPORTAL_DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path}/portal.db",
        "CAPTIVEPORTAL_LOG_LEVEL": "WARNING",
    }
    get_settings.cache_clear()
    with patch.dict(os.environ, env):
        yield env
    get_settings.cache_clear()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_info_masks_database_password(runner):
    get_settings.cache_clear()
    with patch.dict(
        os.environ,
        {"CAPTIVEPORTAL_DATABASE_URL": "postgresql+asyncpg://portal:s3cret@db/portal"},
    ):
        result = runner.invoke(cli, ["info"])
    get_settings.cache_clear()

    assert result.exit_code == 0
    assert "Captive Portal" in result.output
    assert "s3cret" not in result.output
    assert "portal:***@db/portal" in result.output


def test_init_db_then_create_admin(runner, cli_env):
    init_result = runner.invoke(cli, ["init-db", "--force"])
    assert init_result.exit_code == 0, init_result.output
    assert "Database initialized successfully." in init_result.output

    create_result = runner.invoke(
        cli,
        [
            "create-admin",
            "--username",
            "root",
            "--email",
            "root@example.com",
            "--password",
            "RootPass123!",
            "--role",
            "super_admin",
        ],
    )
    assert create_result.exit_code == 0, create_result.output
    assert "Admin created successfully!" in create_result.output
    assert "super_admin" in create_result.output

    duplicate = runner.invoke(
        cli,
        [
            "create-admin",
            "--username",
            "root",
            "--email",
            "other@example.com",
            "--password",
            "RootPass123!",
        ],
    )
    assert duplicate.exit_code == 1
    assert "Username already exists" in duplicate.output


def test_create_admin_rejects_short_password(runner, cli_env):
    result = runner.invoke(
        cli,
        [
            "create-admin",
            "--username",
            "root",
            "--email",
            "root@example.com",
            "--password",
            "short",
        ],
    )

    assert result.exit_code == 1
    assert "Password must be at least 8 characters" in result.output


def test_init_db_refuses_production_without_force(runner, cli_env):
    with patch.dict(os.environ, {"CAPTIVEPORTAL_ENVIRONMENT": "production"}):
        get_settings.cache_clear()
        result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations instead of init-db" in result.output

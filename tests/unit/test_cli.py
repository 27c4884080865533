"""Tests for the collectionstore command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from collectionstore.cli import cli
from collectionstore.core.config import get_settings

MIGRATIONS_PATH = Path(__file__).resolve().parents[2] / "alembic"


@pytest.fixture
def env(tmp_path, monkeypatch):
    """Point the CLI at a file database in a temporary directory."""
    values = {
        "COLLECTIONSTORE_ENVIRONMENT": "testing",
        "COLLECTIONSTORE_DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'data' / 'store.db'}",
        "COLLECTIONSTORE_MIGRATIONS_PATH": str(MIGRATIONS_PATH),
        "COLLECTIONSTORE_LOG_LEVEL": "WARNING",
    }
    for key, value in values.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    return values


def test_info_shows_resolved_database(env):
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Environment:  testing" in result.output
    assert "store.db" in result.output


def test_info_hides_password(monkeypatch):
    monkeypatch.setenv("COLLECTIONSTORE_ENVIRONMENT", "production")
    monkeypatch.setenv("COLLECTIONSTORE_DATABASE_URL", "postgresql+asyncpg://app:s3cret@db/store")

    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "s3cret" not in result.output
    assert "postgresql+asyncpg://app:***@db/store" in result.output


def test_migrate_then_list_collections(env):
    runner = CliRunner()

    migrated = runner.invoke(cli, ["migrate"])
    assert migrated.exit_code == 0
    assert "Migrations applied" in migrated.output

    again = runner.invoke(cli, ["migrate"])
    assert again.exit_code == 0
    assert "Migrations already_applied" in again.output

    listed = runner.invoke(cli, ["collections"])
    assert listed.exit_code == 0
    assert "No collections." in listed.output


def test_migrate_failure_exits_non_zero(env, monkeypatch, tmp_path):
    monkeypatch.setenv("COLLECTIONSTORE_MIGRATIONS_PATH", str(tmp_path / "no-migrations"))
    get_settings.cache_clear()

    result = CliRunner().invoke(cli, ["migrate"])

    assert result.exit_code == 1
    assert "Migration failed" in result.output


def test_check_connection(env):
    result = CliRunner().invoke(cli, ["check"])

    assert result.exit_code == 0
    assert "Database connection OK." in result.output

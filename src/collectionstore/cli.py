"""Command-line interface for CollectionStore.

This module provides the CLI commands for migrating, checking and
inspecting a collection store database.
"""

import asyncio
from typing import NoReturn

import click

from collectionstore.core.config import get_settings
from collectionstore.core.logging import configure_logging, get_logger
from collectionstore.domain.services import CollectionStore
from collectionstore.infrastructure.persistence.database import close_database, init_database
from collectionstore.infrastructure.persistence.migration_service import MigrationOutcome


def _open_store() -> CollectionStore:
    settings = get_settings()
    configure_logging(settings)
    return CollectionStore(db=init_database(settings), settings=settings)


@click.group()
@click.version_option(version="0.1.0", prog_name="CollectionStore")
def cli() -> None:
    """CollectionStore - async storage for collections, items and webhooks.

    Settings are read from COLLECTIONSTORE_* environment variables and .env.
    """


@cli.command()
def migrate() -> None:
    """Apply pending schema migrations."""

    async def run() -> MigrationOutcome:
        store = _open_store()
        try:
            result = await store.initialize()
        finally:
            await close_database()

        if result.ok:
            click.echo(f"Migrations {result.outcome.value} (revision {result.revision}).")
        else:
            click.echo(f"Migration failed: {result.error}", err=True)
        return result.outcome

    if asyncio.run(run()) is MigrationOutcome.FAILED:
        raise SystemExit(1)


@cli.command()
def check() -> None:
    """Check that the database is reachable."""

    async def run() -> bool:
        store = _open_store()
        try:
            return await store.check_connection()
        finally:
            await close_database()

    if asyncio.run(run()):
        click.echo("Database connection OK.")
    else:
        click.echo("Database connection failed.", err=True)
        raise SystemExit(1)


@cli.command()
def collections() -> None:
    """List stored collections."""
    logger = get_logger(__name__)

    async def run() -> None:
        store = _open_store()
        try:
            rows = await store.list_collections()
        finally:
            await close_database()

        logger.debug("Listed collections", count=len(rows))
        if not rows:
            click.echo("No collections.")
            return
        for collection in rows:
            click.echo(f"{collection.id}  {collection.name}  {collection.created_at}")

    asyncio.run(run())


@cli.command()
def info() -> None:
    """Display CollectionStore configuration."""
    from sqlalchemy.engine import make_url

    settings = get_settings()
    url = make_url(settings.resolved_database_url).render_as_string(hide_password=True)

    click.echo(f"""
CollectionStore v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}

Database:
  URL:          {url}
  Pool Size:    {settings.db_pool_size}
  Timeout:      {settings.db_operation_timeout} seconds
  Migrations:   {settings.migrations_path}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Startup migrations through CollectionStore.initialize."""

import pytest
from sqlalchemy import inspect

from collectionstore.domain.services import CollectionStore
from collectionstore.infrastructure.persistence.migration_service import (
    MigrationOutcome,
    MigrationService,
)

HEAD_REVISION = "3f1c9a2b7d40"


@pytest.fixture
def unmigrated_store(db_manager, settings):
    """Store over an empty database with no tables."""
    return CollectionStore(db=db_manager, settings=settings)


@pytest.mark.asyncio
async def test_initialize_applies_migrations(unmigrated_store, db_engine):
    result = await unmigrated_store.initialize()

    assert result.outcome is MigrationOutcome.APPLIED
    assert result.ok is True
    assert result.revision == HEAD_REVISION

    async with db_engine.connect() as conn:
        tables = await conn.run_sync(lambda c: set(inspect(c).get_table_names()))
    assert {"collections", "items", "webhooks", "alembic_version"} <= tables


@pytest.mark.asyncio
async def test_initialize_twice_reports_already_applied(unmigrated_store):
    await unmigrated_store.initialize()

    result = await unmigrated_store.initialize()

    assert result.outcome is MigrationOutcome.ALREADY_APPLIED
    assert result.revision == HEAD_REVISION


@pytest.mark.asyncio
async def test_migrated_schema_supports_every_operation(unmigrated_store):
    await unmigrated_store.initialize()
    store = unmigrated_store

    collection = await store.create_collection("books", {"fields": ["title"]})
    item = await store.add_item(collection.id, {"title": "Dune"})
    await store.update_item(collection.id, item.id, {"title": "Dune Messiah"})
    await store.add_webhook(collection.id, "https://example.com/hook", ["create", "delete"])

    fetched = await store.get_collection(collection.id)
    assert fetched.items[0].data == {"title": "Dune Messiah"}
    assert (await store.list_webhooks(collection.id))[0].events == ["create", "delete"]


@pytest.mark.asyncio
async def test_initialize_failure_is_reported_not_raised(db_manager, settings, tmp_path):
    store = CollectionStore(
        db=db_manager,
        settings=settings,
        migration_service=MigrationService(
            script_location=str(tmp_path / "no-migrations"), settings=settings
        ),
    )

    result = await store.initialize()

    assert result.outcome is MigrationOutcome.FAILED
    assert result.ok is False
    assert result.error
    assert result.revision is None


@pytest.mark.asyncio
async def test_current_revision_of_empty_database(db_engine, settings):
    service = MigrationService(settings=settings)

    assert await service.current_revision(db_engine) is None


@pytest.mark.asyncio
async def test_percent_encoded_database_url(db_manager, settings):
    """Passwords with URL escapes must not break store construction or migrations."""
    encoded = settings.model_copy(
        update={"database_url": "postgresql+asyncpg://app:p%40ss@db/store"}
    )

    store = CollectionStore(db=db_manager, settings=encoded)
    result = await store.initialize()

    assert result.outcome is MigrationOutcome.APPLIED
    assert result.revision == HEAD_REVISION


def test_migrations_path_with_percent_sign(settings, tmp_path):
    location = tmp_path / "100%_migrations"

    service = MigrationService(script_location=str(location), settings=settings)

    assert service.config.get_main_option("script_location") == str(location)

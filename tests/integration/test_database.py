import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from collectionstore.infrastructure.persistence import database
from collectionstore.infrastructure.persistence.database import (
    DatabaseManager,
    close_database,
    get_db_manager,
    init_database,
)


@pytest.mark.asyncio
async def test_database_connection(db_manager):
    """Test that the database manager can connect to the database."""
    assert await db_manager.check_connection() is True


@pytest.mark.asyncio
async def test_database_session(db_manager):
    async with db_manager.session() as session:
        result = await session.execute(text("SELECT 1"))
        assert result.scalar() == 1


@pytest.mark.asyncio
async def test_session_rolls_back_on_error(db_manager):
    await db_manager.create_tables()

    with pytest.raises(RuntimeError):
        async with db_manager.session() as session:
            await session.execute(
                text(
                    "INSERT INTO collections (id, name, schema, created_at, updated_at) "
                    "VALUES ('c1', 'books', '{}', 'a', 'a')"
                )
            )
            raise RuntimeError("boom")

    async with db_manager.session() as session:
        count = await session.execute(text("SELECT COUNT(*) FROM collections"))
        assert count.scalar() == 0


@pytest.mark.asyncio
async def test_memory_database_uses_static_pool(settings):
    manager = DatabaseManager(settings)

    assert isinstance(manager.engine.sync_engine.pool, StaticPool)
    await manager.create_tables()
    assert await manager.check_connection() is True
    await manager.disconnect()


@pytest.mark.asyncio
async def test_init_and_close_process_database(settings, tmp_path):
    db_file = tmp_path / "nested" / "store.db"
    file_settings = settings.model_copy(update={"database_url": f"sqlite+aiosqlite:///{db_file}"})

    manager = init_database(file_settings)
    try:
        assert get_db_manager() is manager
        assert db_file.parent.is_dir()
        assert await manager.check_connection() is True
    finally:
        await close_database()

    assert database._db_manager is None

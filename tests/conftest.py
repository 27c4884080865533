"""Pytest configuration for all tests."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from collectionstore.core.config import Settings, get_settings
from collectionstore.domain.services import CollectionStore
from collectionstore.infrastructure.persistence import models  # noqa: F401
from collectionstore.infrastructure.persistence.database import DatabaseManager

MIGRATIONS_PATH = Path(__file__).resolve().parents[1] / "alembic"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        migrations_path=str(MIGRATIONS_PATH),
        db_operation_timeout=5.0,
    )


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_manager(settings: Settings, db_engine: AsyncEngine) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager wrapping the isolated test engine."""
    manager = DatabaseManager(settings, engine=db_engine)
    yield manager
    await manager.disconnect()


@pytest_asyncio.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session with all tables created."""
    await db_manager.create_tables()
    async with db_manager.session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def store(db_manager: DatabaseManager, settings: Settings) -> CollectionStore:
    """Collection store on a fresh schema built from model metadata."""
    await db_manager.create_tables()
    return CollectionStore(db=db_manager, settings=settings)

"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the engine and session management for the collection
store. It supports both SQLite (aiosqlite) and PostgreSQL (asyncpg) drivers.

The process-wide manager is explicit state: ``init_database()`` installs it,
``get_db_manager()`` returns it and ``close_database()`` disposes it. Tests
construct their own ``DatabaseManager`` around an isolated engine instead.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from collectionstore.core.config import Settings, get_settings
from collectionstore.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _is_sqlite_memory(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


class DatabaseManager:
    """Database connection and session manager.

    This class manages the async database engine and session factory.
    An engine may be injected, in which case the settings are only used
    for logging and the manager does not build its own.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        """Initialize the database manager.

        Args:
            settings: Optional settings; loaded from the environment if omitted.
            engine: Optional pre-built async engine.
        """
        self.settings = settings or get_settings()
        self._engine = engine
        self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine.

        Returns:
            AsyncEngine: SQLAlchemy async engine instance.
        """
        if self._engine is None:
            url = self.settings.resolved_database_url
            if _is_sqlite_memory(url):
                self._engine = create_async_engine(
                    url,
                    echo=self.settings.db_echo,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_async_engine(
                    url,
                    echo=self.settings.db_echo,
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                    pool_pre_ping=True,
                    # SQLite-specific settings
                    connect_args={
                        "check_same_thread": False,
                    }
                    if url.startswith("sqlite")
                    else {},
                )

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                environment=self.settings.environment,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory.

        Returns:
            async_sessionmaker: SQLAlchemy async session factory.
        """
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
        """Create all tables directly from model metadata.

        Used by tests and throwaway databases; real deployments migrate.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data. Only use in testing!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope for one store operation.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                result = await session.execute(select(CollectionModel))
                collections = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Process-wide database manager, managed by init_database()/close_database()
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the process-wide database manager, creating it on first use.

    Returns:
        DatabaseManager: Process-wide database manager instance.
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def init_database(settings: Settings | None = None) -> DatabaseManager:
    """Install a fresh process-wide database manager.

    Creates the parent directory of a file-backed SQLite database so the
    first connection can open it.

    Args:
        settings: Optional settings; loaded from the environment if omitted.

    Returns:
        DatabaseManager: The installed manager.
    """
    global _db_manager
    settings = settings or get_settings()
    url = settings.resolved_database_url

    if url.startswith("sqlite") and not _is_sqlite_memory(url):
        # Extract path from sqlite+aiosqlite:///path/to/file.db
        db_dir = Path(url.split(":///")[-1]).parent
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Database directory ensured", path=str(db_dir))

    _db_manager = DatabaseManager(settings)
    return _db_manager


async def close_database() -> None:
    """Dispose the process-wide database manager, if any."""
    global _db_manager
    if _db_manager is not None:
        await _db_manager.disconnect()
        _db_manager = None

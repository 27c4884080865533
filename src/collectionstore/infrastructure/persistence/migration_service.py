"""Migration service for the collection store schema.

Uses the Alembic programmatic API to bring the database up to the latest
revision and to report whether anything was applied.
"""

import os
from dataclasses import dataclass
from enum import Enum

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from collectionstore.core.config import Settings, get_settings
from collectionstore.core.logging import get_logger

logger = get_logger(__name__)


class MigrationOutcome(str, Enum):
    """Result of a startup migration attempt."""

    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    FAILED = "failed"


@dataclass
class MigrationResult:
    """Outcome of ``CollectionStore.initialize``.

    Attributes:
        outcome: Whether migrations were applied, already current, or failed.
        revision: Database revision after the attempt, if known.
        error: Error text when the attempt failed.
    """

    outcome: MigrationOutcome
    revision: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not MigrationOutcome.FAILED


class MigrationService:
    """Service for programmatically applying Alembic migrations."""

    def __init__(
        self,
        script_location: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the migration service.

        Args:
            script_location: Alembic script directory. Defaults to
                ``settings.migrations_path``.
            settings: Optional settings; loaded from the environment if omitted.
        """
        self.settings = settings or get_settings()
        location = script_location or self.settings.migrations_path
        if not os.path.isabs(location):
            location = os.path.abspath(location)

        self.config = Config()
        # ConfigParser treats "%" as interpolation syntax
        self.config.set_main_option("script_location", location.replace("%", "%%"))

    @property
    def script(self) -> ScriptDirectory:
        return ScriptDirectory.from_config(self.config)

    async def apply_migrations(self, engine: AsyncEngine) -> MigrationOutcome:
        """Upgrade the database to the latest revision.

        Args:
            engine: Engine of the database to migrate.

        Returns:
            APPLIED if any revision ran, ALREADY_APPLIED if the database
            was already at head.
        """
        async with engine.begin() as connection:
            return await connection.run_sync(self._upgrade)

    async def current_revision(self, engine: AsyncEngine) -> str | None:
        """Get the revision the database is currently stamped with."""
        async with engine.connect() as connection:
            return await connection.run_sync(
                lambda sync_conn: MigrationContext.configure(sync_conn).get_current_revision()
            )

    def _upgrade(self, sync_conn: Connection) -> MigrationOutcome:
        heads = set(self.script.get_heads())
        current = set(MigrationContext.configure(sync_conn).get_current_heads())
        if current == heads:
            logger.debug("Database schema already at head", heads=sorted(heads))
            return MigrationOutcome.ALREADY_APPLIED

        self.config.attributes["connection"] = sync_conn
        try:
            command.upgrade(self.config, "head")
        finally:
            self.config.attributes.pop("connection", None)

        logger.info(
            "Database schema upgraded",
            from_revisions=sorted(current),
            to_revisions=sorted(heads),
        )
        return MigrationOutcome.APPLIED

"""Collection store service.

The public entry point for collections, their items and their webhooks.
Every operation runs as an independent request: its own session, its own
commit, bounded by ``Settings.db_operation_timeout``. Operations that read
after writing (``update_collection``, ``update_item``) and the
collection-plus-items read (``get_collection``) are sequential queries with
no transaction spanning them; a concurrent delete in between shows up as a
not-found result.
"""

import asyncio
import copy
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy import exc as sa_exc
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from collectionstore.core.config import Settings
from collectionstore.core.logging import get_logger
from collectionstore.domain.entities import Collection, Item, Webhook
from collectionstore.domain.exceptions import (
    SchemaNotInitializedError,
    StorageUnavailableError,
)
from collectionstore.domain.services.event_codec import decode_events, encode_events
from collectionstore.domain.services.id_generator import IdGenerator
from collectionstore.domain.services.timestamps import utc_timestamp
from collectionstore.infrastructure.persistence.database import (
    DatabaseManager,
    get_db_manager,
)
from collectionstore.infrastructure.persistence.migration_service import (
    MigrationOutcome,
    MigrationResult,
    MigrationService,
)
from collectionstore.infrastructure.persistence.models import (
    CollectionModel,
    ItemModel,
    WebhookModel,
)
from collectionstore.infrastructure.persistence.repositories import (
    CollectionRepository,
    ItemRepository,
    WebhookRepository,
)

logger = get_logger(__name__)

T = TypeVar("T")

UPDATABLE_COLLECTION_FIELDS = frozenset({"name", "schema"})

MISSING_SCHEMA_MARKERS = ("no such table", "undefinedtableerror")


def _is_missing_schema(error: DBAPIError) -> bool:
    """Tell a missing table apart from a connectivity failure."""
    if error.connection_invalidated:
        return False
    message = str(error).lower()
    return any(marker in message for marker in MISSING_SCHEMA_MARKERS)


def _to_item(model: ItemModel) -> Item:
    return Item(
        id=model.id,
        collection_id=model.collection_id,
        data=model.data,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_collection(model: CollectionModel, items: list[Item] | None = None) -> Collection:
    return Collection(
        id=model.id,
        name=model.name,
        schema=model.schema if model.schema is not None else {},
        created_at=model.created_at,
        updated_at=model.updated_at,
        items=items,
    )


def _to_webhook(model: WebhookModel) -> Webhook:
    return Webhook(
        id=model.id,
        collection_id=model.collection_id,
        url=model.url,
        events=decode_events(model.events, webhook_id=model.id),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Collection name must be a non-empty string")
    return name


def _validate_schema(schema: Any) -> dict[str, Any]:
    if schema is None:
        return {}
    if not isinstance(schema, Mapping):
        raise ValueError("Collection schema must be a mapping")
    return copy.deepcopy(dict(schema))


def _validate_events(events: Any) -> list[str]:
    if isinstance(events, (str, bytes)) or not isinstance(events, Sequence):
        raise ValueError("Webhook events must be a sequence of event names")
    if not all(isinstance(event, str) for event in events):
        raise ValueError("Webhook event names must be strings")
    return list(events)


class CollectionStore:
    """Async store for collections, items and webhooks.

    Args:
        db: Database manager. Defaults to the process-wide manager.
        settings: Settings; defaults to the manager's settings.
        migration_service: Service used by ``initialize``.
        id_generator: Source of new record IDs.
    """

    def __init__(
        self,
        db: DatabaseManager | None = None,
        settings: Settings | None = None,
        migration_service: MigrationService | None = None,
        id_generator: type[IdGenerator] = IdGenerator,
    ) -> None:
        self.db = db or get_db_manager()
        self.settings = settings or self.db.settings
        self.migration_service = migration_service or MigrationService(settings=self.settings)
        self.id_generator = id_generator

    @property
    def timeout(self) -> float:
        return self.settings.db_operation_timeout

    async def _run(
        self, operation: str, work: Callable[[AsyncSession], Awaitable[T]]
    ) -> T:
        """Run one unit of work in its own session, bounded by the timeout.

        Raises:
            StorageUnavailableError: If no connection can be obtained or the
                operation does not finish in time.
            SchemaNotInitializedError: If the store tables do not exist yet.
        """

        async def scoped() -> T:
            async with self.db.session() as session:
                result = await work(session)
                await session.commit()
                return result

        try:
            return await asyncio.wait_for(scoped(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Storage operation timed out", operation=operation, timeout=self.timeout)
            raise StorageUnavailableError(
                operation, f"timed out after {self.timeout} seconds"
            ) from e
        except (OperationalError, ProgrammingError) as e:
            if _is_missing_schema(e):
                logger.error(
                    "Storage schema missing, run migrations",
                    operation=operation,
                    error=str(e),
                )
                raise SchemaNotInitializedError(operation, str(e)) from e
            if isinstance(e, ProgrammingError):
                raise
            logger.error("Storage unavailable", operation=operation, error=str(e))
            raise StorageUnavailableError(operation, str(e)) from e
        except (sa_exc.TimeoutError, DisconnectionError, InterfaceError, OSError) as e:
            logger.error("Storage unavailable", operation=operation, error=str(e))
            raise StorageUnavailableError(operation, str(e)) from e

    # Collections

    async def create_collection(
        self, name: str, schema: Mapping[str, Any] | None = None
    ) -> Collection:
        """Create a collection.

        Args:
            name: Collection name.
            schema: Optional schema description; defaults to an empty mapping.

        Returns:
            The new collection, with ``created_at == updated_at``.
        """
        name = _validate_name(name)
        schema = _validate_schema(schema)
        now = utc_timestamp()
        collection_id = self.id_generator.generate()

        async def work(session: AsyncSession) -> None:
            await CollectionRepository(session).create(
                CollectionModel(
                    id=collection_id,
                    name=name,
                    schema=schema,
                    created_at=now,
                    updated_at=now,
                )
            )

        await self._run("create_collection", work)
        logger.info("Collection created", collection_id=collection_id, name=name)
        return Collection(
            id=collection_id,
            name=name,
            schema=copy.deepcopy(schema),
            created_at=now,
            updated_at=now,
        )

    async def list_collections(self) -> list[Collection]:
        """List all collections, without their items."""

        async def work(session: AsyncSession) -> list[Collection]:
            models = await CollectionRepository(session).list_all()
            return [_to_collection(model) for model in models]

        return await self._run("list_collections", work)

    async def get_collection(self, collection_id: str) -> Collection | None:
        """Get a collection with its items attached.

        The collection row and its items are fetched by two separate queries.

        Returns:
            The collection, or None if it does not exist.
        """

        async def work(session: AsyncSession) -> Collection | None:
            model = await CollectionRepository(session).get_by_id(collection_id)
            if model is None:
                return None
            item_models = await ItemRepository(session).list_by_collection(collection_id)
            return _to_collection(model, items=[_to_item(m) for m in item_models])

        return await self._run("get_collection", work)

    async def update_collection(
        self, collection_id: str, updates: Mapping[str, Any]
    ) -> Collection | None:
        """Merge fields over a collection and refresh ``updated_at``.

        The write is unconditional: a missing collection updates zero rows and
        the follow-up read returns None.

        Args:
            collection_id: The collection ID.
            updates: Subset of ``name`` and ``schema``; omitted fields keep
                their stored values.

        Returns:
            The refreshed collection (with items), or None if it does not exist.
        """
        unknown = set(updates) - UPDATABLE_COLLECTION_FIELDS
        if unknown:
            raise ValueError(f"Cannot update collection fields: {', '.join(sorted(unknown))}")

        values: dict[str, Any] = {}
        if "name" in updates:
            values["name"] = _validate_name(updates["name"])
        if "schema" in updates:
            values["schema"] = _validate_schema(updates["schema"])
        stamp = utc_timestamp()

        async def work(session: AsyncSession) -> int:
            return await CollectionRepository(session).update_fields(collection_id, values, stamp)

        updated = await self._run("update_collection", work)
        if not updated:
            logger.debug("Collection update matched no rows", collection_id=collection_id)
        return await self.get_collection(collection_id)

    async def delete_collection(self, collection_id: str) -> bool:
        """Delete a collection. Its items and webhooks are not removed.

        Returns:
            True if a row was removed.
        """

        async def work(session: AsyncSession) -> bool:
            return await CollectionRepository(session).delete_by_id(collection_id)

        deleted = await self._run("delete_collection", work)
        if deleted:
            logger.info("Collection deleted", collection_id=collection_id)
        return deleted

    # Items

    async def add_item(self, collection_id: str, data: Any) -> Item:
        """Add an item to a collection.

        The collection's existence is not checked.
        """
        data = copy.deepcopy(data)
        now = utc_timestamp()
        item_id = self.id_generator.generate()

        async def work(session: AsyncSession) -> None:
            await ItemRepository(session).create(
                ItemModel(
                    id=item_id,
                    collection_id=collection_id,
                    data=data,
                    created_at=now,
                    updated_at=now,
                )
            )

        await self._run("add_item", work)
        logger.debug("Item added", collection_id=collection_id, item_id=item_id)
        return Item(
            id=item_id,
            collection_id=collection_id,
            data=copy.deepcopy(data),
            created_at=now,
            updated_at=now,
        )

    async def update_item(self, collection_id: str, item_id: str, data: Any) -> Item | None:
        """Replace an item's data.

        The write matches on both ``item_id`` and ``collection_id``, but the
        returned item is read back by ``item_id`` alone. When the collection
        does not match, nothing is written and the item is returned as it is
        stored in its own collection.

        Returns:
            The stored item after the update, or None if no item has that ID.
        """
        data = copy.deepcopy(data)
        stamp = utc_timestamp()

        async def write(session: AsyncSession) -> int:
            return await ItemRepository(session).replace_data(collection_id, item_id, data, stamp)

        updated = await self._run("update_item", write)
        if not updated:
            logger.debug(
                "Item update matched no rows",
                collection_id=collection_id,
                item_id=item_id,
            )

        async def read(session: AsyncSession) -> Item | None:
            model = await ItemRepository(session).get_by_id(item_id)
            return _to_item(model) if model is not None else None

        return await self._run("update_item", read)

    async def delete_item(self, collection_id: str, item_id: str) -> bool:
        """Delete an item matched on both its ID and its collection ID.

        Returns:
            True if a row was removed; False for a missing item or a
            mismatched collection.
        """

        async def work(session: AsyncSession) -> bool:
            return await ItemRepository(session).delete(collection_id, item_id)

        return await self._run("delete_item", work)

    # Webhooks

    async def list_webhooks(self, collection_id: str) -> list[Webhook]:
        """List a collection's webhooks with their events decoded.

        Rows whose stored events cannot be decoded get an empty event list.
        """

        async def work(session: AsyncSession) -> list[Webhook]:
            models = await WebhookRepository(session).list_by_collection(collection_id)
            return [_to_webhook(model) for model in models]

        return await self._run("list_webhooks", work)

    async def add_webhook(
        self, collection_id: str, url: str, events: Sequence[str]
    ) -> Webhook:
        """Register a webhook for a collection.

        Returns:
            The new webhook, carrying the caller's events rather than a
            decoded copy of the stored encoding.
        """
        if not isinstance(url, str) or not url.strip():
            raise ValueError("Webhook URL must be a non-empty string")
        events = _validate_events(events)
        now = utc_timestamp()
        webhook_id = self.id_generator.generate()

        async def work(session: AsyncSession) -> None:
            await WebhookRepository(session).create(
                WebhookModel(
                    id=webhook_id,
                    collection_id=collection_id,
                    url=url,
                    events=encode_events(events),
                    created_at=now,
                    updated_at=now,
                )
            )

        await self._run("add_webhook", work)
        logger.info("Webhook added", collection_id=collection_id, webhook_id=webhook_id)
        return Webhook(
            id=webhook_id,
            collection_id=collection_id,
            url=url,
            events=events,
            created_at=now,
            updated_at=now,
        )

    async def delete_webhook(self, webhook_id: str) -> bool:
        """Delete a webhook by ID, regardless of collection.

        Returns:
            True if a row was removed.
        """

        async def work(session: AsyncSession) -> bool:
            return await WebhookRepository(session).delete_by_id(webhook_id)

        return await self._run("delete_webhook", work)

    # Lifecycle

    async def initialize(self) -> MigrationResult:
        """Apply pending schema migrations.

        Never raises: a failure is logged and reported as
        ``MigrationOutcome.FAILED`` so startup can continue.
        """
        try:
            outcome = await asyncio.wait_for(
                self.migration_service.apply_migrations(self.db.engine),
                timeout=self.timeout,
            )
            revision = await self.migration_service.current_revision(self.db.engine)
        except Exception as e:
            logger.error(
                "Schema migration failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return MigrationResult(outcome=MigrationOutcome.FAILED, error=str(e) or type(e).__name__)

        logger.info("Schema migrations checked", outcome=outcome.value, revision=revision)
        return MigrationResult(outcome=outcome, revision=revision)

    async def check_connection(self) -> bool:
        return await self.db.check_connection()

    async def close(self) -> None:
        """Release the store's database connections."""
        await self.db.disconnect()

"""Repository for collection operations.

Provides CRUD operations for the collections table.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from collectionstore.infrastructure.persistence.models import CollectionModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Create a new collection.

        Args:
            collection: The collection model to create.

        Returns:
            The created collection model.
        """
        self.session.add(collection)
        await self.session.flush()
        return collection

    async def list_all(self) -> Sequence[CollectionModel]:
        """List every collection, oldest first."""
        result = await self.session.execute(
            select(CollectionModel).order_by(CollectionModel.created_at, CollectionModel.id)
        )
        return result.scalars().all()

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        """Get a collection by ID.

        Args:
            collection_id: The collection ID.

        Returns:
            The collection model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.scalar_one_or_none()

    async def update_fields(
        self, collection_id: str, values: dict[str, Any], stamp: str
    ) -> int:
        """Overwrite the given columns and refresh ``updated_at``.

        ``updated_at`` becomes the later of its stored value and ``stamp``,
        so it never moves backwards.

        Args:
            collection_id: The collection ID.
            values: Column values to write.
            stamp: ISO timestamp of this update.

        Returns:
            Number of rows updated (0 when the collection does not exist).
        """
        result = await self.session.execute(
            update(CollectionModel)
            .where(CollectionModel.id == collection_id)
            .values(
                **values,
                updated_at=case(
                    (CollectionModel.updated_at > stamp, CollectionModel.updated_at),
                    else_=stamp,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def delete_by_id(self, collection_id: str) -> bool:
        """Delete a collection by ID. Items and webhooks are left untouched.

        Returns:
            True if deleted, False if not found.
        """
        result = await self.session.execute(
            delete(CollectionModel).where(CollectionModel.id == collection_id)
        )
        await self.session.flush()
        return result.rowcount > 0

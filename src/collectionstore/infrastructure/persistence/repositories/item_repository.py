"""Repository for item operations."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from collectionstore.infrastructure.persistence.models import ItemModel


class ItemRepository:
    """Repository for item database operations.

    Writes are matched on ``(id, collection_id)``; ``get_by_id`` looks an item
    up by its ID alone.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, item: ItemModel) -> ItemModel:
        self.session.add(item)
        await self.session.flush()
        return item

    async def list_by_collection(self, collection_id: str) -> Sequence[ItemModel]:
        """List the items of a collection in creation order."""
        result = await self.session.execute(
            select(ItemModel)
            .where(ItemModel.collection_id == collection_id)
            .order_by(ItemModel.created_at, ItemModel.id)
        )
        return result.scalars().all()

    async def get_by_id(self, item_id: str) -> ItemModel | None:
        """Get an item by ID, regardless of its collection."""
        result = await self.session.execute(
            select(ItemModel).where(ItemModel.id == item_id).limit(1)
        )
        return result.scalars().first()

    async def replace_data(
        self, collection_id: str, item_id: str, data: Any, stamp: str
    ) -> int:
        """Replace an item's data wholesale and refresh ``updated_at``.

        Args:
            collection_id: Collection the item must belong to.
            item_id: The item ID.
            data: New payload.
            stamp: ISO timestamp of this update.

        Returns:
            Number of rows updated.
        """
        result = await self.session.execute(
            update(ItemModel)
            .where(ItemModel.id == item_id, ItemModel.collection_id == collection_id)
            .values(
                data=data,
                updated_at=case(
                    (ItemModel.updated_at > stamp, ItemModel.updated_at),
                    else_=stamp,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def delete(self, collection_id: str, item_id: str) -> bool:
        """Delete an item matched on both its ID and collection ID.

        Returns:
            True if deleted, False if no item matched.
        """
        result = await self.session.execute(
            delete(ItemModel).where(
                ItemModel.id == item_id,
                ItemModel.collection_id == collection_id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0

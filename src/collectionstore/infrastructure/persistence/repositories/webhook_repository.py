"""Repository for webhook operations."""

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from collectionstore.infrastructure.persistence.models import WebhookModel


class WebhookRepository:
    """Repository for webhook database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, webhook: WebhookModel) -> WebhookModel:
        self.session.add(webhook)
        await self.session.flush()
        return webhook

    async def list_by_collection(self, collection_id: str) -> Sequence[WebhookModel]:
        """List the webhooks registered for a collection in creation order."""
        result = await self.session.execute(
            select(WebhookModel)
            .where(WebhookModel.collection_id == collection_id)
            .order_by(WebhookModel.created_at, WebhookModel.id)
        )
        return result.scalars().all()

    async def delete_by_id(self, webhook_id: str) -> bool:
        """Delete a webhook by ID, whichever collection it belongs to.

        Returns:
            True if deleted, False if not found.
        """
        result = await self.session.execute(
            delete(WebhookModel).where(WebhookModel.id == webhook_id)
        )
        await self.session.flush()
        return result.rowcount > 0

"""Persistence repositories for database operations."""

from collectionstore.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from collectionstore.infrastructure.persistence.repositories.item_repository import (
    ItemRepository,
)
from collectionstore.infrastructure.persistence.repositories.webhook_repository import (
    WebhookRepository,
)

__all__ = [
    "CollectionRepository",
    "ItemRepository",
    "WebhookRepository",
]

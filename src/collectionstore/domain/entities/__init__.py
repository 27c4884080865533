"""Domain entities for CollectionStore.

Entities are pure Python dataclasses returned to callers. They never alias
ORM instances, so callers may mutate them freely.
"""

from collectionstore.domain.entities.collection import Collection
from collectionstore.domain.entities.item import Item
from collectionstore.domain.entities.webhook import Webhook

__all__ = [
    "Collection",
    "Item",
    "Webhook",
]

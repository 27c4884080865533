"""SQLAlchemy models for the collection store tables.

Importing this package registers every table with ``Base.metadata``.
"""

from collectionstore.infrastructure.persistence.models.collection import CollectionModel
from collectionstore.infrastructure.persistence.models.item import ItemModel
from collectionstore.infrastructure.persistence.models.webhook import WebhookModel

__all__ = [
    "CollectionModel",
    "ItemModel",
    "WebhookModel",
]

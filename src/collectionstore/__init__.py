"""CollectionStore - async storage for collections, items and webhooks.

Collections carry a schema description and an ordered set of arbitrary
items; webhooks subscribe URLs to named events of a collection.
"""

__version__ = "0.1.0"

from collectionstore.domain.entities import Collection, Item, Webhook
from collectionstore.domain.exceptions import (
    CollectionStoreError,
    SchemaNotInitializedError,
    StorageUnavailableError,
)
from collectionstore.domain.services import CollectionStore
from collectionstore.infrastructure.persistence.migration_service import (
    MigrationOutcome,
    MigrationResult,
)

__all__ = [
    "Collection",
    "CollectionStore",
    "CollectionStoreError",
    "Item",
    "MigrationOutcome",
    "MigrationResult",
    "SchemaNotInitializedError",
    "StorageUnavailableError",
    "Webhook",
    "__version__",
]

"""Collection entity.

A collection is a named, schema-tagged container of items. The schema is an
arbitrary mapping supplied by the caller; the store does not interpret it.
"""

from dataclasses import dataclass, field
from typing import Any

from collectionstore.domain.entities.item import Item


@dataclass
class Collection:
    """Collection entity.

    Attributes:
        id: Unique identifier generated at creation time.
        name: Collection name.
        schema: Caller-supplied schema description (defaults to an empty mapping).
        created_at: ISO-8601 timestamp when the collection was created.
        updated_at: ISO-8601 timestamp when the collection was last updated.
        items: Items attached on a by-id read; None when the collection was
            loaded without its items.
    """

    id: str
    name: str
    created_at: str
    updated_at: str
    schema: dict[str, Any] = field(default_factory=dict)
    items: list[Item] | None = None

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.name:
            raise ValueError("Collection name is required")
        if not isinstance(self.schema, dict):
            raise ValueError("Schema must be a dictionary")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the collection, including items when they were loaded."""
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "schema": self.schema,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.items is not None:
            payload["items"] = [item.to_dict() for item in self.items]
        return payload

"""Item entity: an opaque data record belonging to one collection."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class Item:
    """Item entity.

    Attributes:
        id: Unique identifier generated at creation time.
        collection_id: ID of the owning collection (not enforced by the database).
        data: Arbitrary caller-supplied value, stored opaquely.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 timestamp of the last data replacement.
    """

    id: str
    collection_id: str
    data: Any
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

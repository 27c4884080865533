"""Webhook entity: a URL subscribed to named events of a collection."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Webhook:
    """Webhook entity.

    Attributes:
        id: Unique identifier.
        collection_id: ID of the collection the webhook listens to.
        url: Target URL.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 timestamp of the last update.
        events: Ordered event names the webhook subscribes to.

    The URL is checked when a webhook is registered, not when stored rows
    are read back.
    """

    id: str
    collection_id: str
    url: str
    created_at: str
    updated_at: str
    events: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

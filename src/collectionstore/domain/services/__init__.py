"""Domain services for CollectionStore."""

from collectionstore.domain.services.collection_store import CollectionStore
from collectionstore.domain.services.event_codec import decode_events, encode_events
from collectionstore.domain.services.id_generator import IdGenerator
from collectionstore.domain.services.timestamps import utc_timestamp

__all__ = [
    "CollectionStore",
    "IdGenerator",
    "decode_events",
    "encode_events",
    "utc_timestamp",
]

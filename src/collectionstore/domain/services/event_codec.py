"""Textual encoding of webhook event lists.

Events are persisted as JSON text. Decoding never fails: anything that is not
a JSON list of strings is logged and replaced by an empty list, so one
corrupted row cannot break a webhook listing.
"""

import json
from collections.abc import Sequence

from collectionstore.core.logging import get_logger

logger = get_logger(__name__)


def encode_events(events: Sequence[str]) -> str:
    """Encode an ordered sequence of event names as JSON text."""
    return json.dumps(list(events))


def decode_events(raw: str | None, webhook_id: str | None = None) -> list[str]:
    """Decode stored events, substituting an empty list for malformed data.

    Args:
        raw: The stored JSON text.
        webhook_id: ID of the webhook row, used for diagnostics only.

    Returns:
        The decoded event names, or an empty list.
    """
    if raw is None:
        return []

    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(
            "Undecodable webhook events, substituting empty list",
            webhook_id=webhook_id,
            error=str(e),
        )
        return []

    if not isinstance(decoded, list) or not all(isinstance(e, str) for e in decoded):
        logger.warning(
            "Webhook events are not a list of strings, substituting empty list",
            webhook_id=webhook_id,
            value_type=type(decoded).__name__,
        )
        return []

    return decoded

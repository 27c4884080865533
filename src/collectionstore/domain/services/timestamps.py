"""Timestamp helpers.

Timestamps are stored as fixed-width ISO-8601 UTC strings so that string
comparison orders them chronologically.
"""

from datetime import UTC, datetime


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format a moment (default: now) as e.g. ``2026-10-19T04:30:00.123456Z``."""
    if moment is None:
        moment = datetime.now(UTC)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

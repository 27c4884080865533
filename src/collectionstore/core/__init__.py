"""Core CollectionStore utilities.

This module exports core utilities for use throughout the application.
"""

from collectionstore.core.config import Settings, get_settings
from collectionstore.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]

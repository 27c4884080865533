import logging
from types import SimpleNamespace

import pytest
import structlog

from collectionstore.core.logging import (
    configure_logging,
    get_logger,
    rename_message_field,
)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo global logging configuration after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _settings(**overrides):
    values = {
        "log_level": "INFO",
        "log_format": "json",
        "is_development": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_rename_message_field():
    event_dict = {"event": "Collection created", "collection_id": "abc"}

    result = rename_message_field(None, "info", event_dict)

    assert result == {"message": "Collection created", "collection_id": "abc"}


def test_json_logging_renders_message(capsys):
    configure_logging(_settings())

    get_logger("collectionstore.test").info("Collection created", collection_id="abc")

    out = capsys.readouterr().out
    assert '"message": "Collection created"' in out
    assert '"collection_id": "abc"' in out
    assert '"level": "info"' in out


def test_console_logging_in_development(capsys):
    configure_logging(_settings(is_development=True))

    get_logger().warning("Webhook events malformed")

    assert "Webhook events malformed" in capsys.readouterr().out


def test_log_level_filters_lower_levels(capsys):
    configure_logging(_settings(log_level="WARNING"))

    get_logger().info("hidden")

    assert "hidden" not in capsys.readouterr().out

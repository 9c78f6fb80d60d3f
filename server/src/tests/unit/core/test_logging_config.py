"""
Tests for the logging configuration.
"""

import pytest

from server.src.core.logging_config import get_logger, get_logging_config


@pytest.mark.parametrize(
    "module, expected",
    [
        ("server.src.services.rate_limiter", "squadblock.services"),
        ("server.src.api.events", "squadblock.api"),
        ("server.src.main", "squadblock.main"),
        ("squadblock.core", "squadblock.core"),
        ("tools", "squadblock.tools"),
    ],
)
def test_get_logger_maps_into_hierarchy(module, expected):
    assert get_logger(module).name == expected


def test_plugin_logger_uses_requested_level():
    config = get_logging_config("debug", "development")

    assert config["loggers"]["squadblock"]["level"] == "DEBUG"
    assert config["handlers"]["console"]["level"] == "DEBUG"
    assert config["handlers"]["error_console"]["level"] == "ERROR"


def test_development_uses_plain_formatter():
    config = get_logging_config("INFO", "development")

    assert config["formatters"]["default"]["class"] == "logging.Formatter"
    assert "funcName" in config["formatters"]["detailed"]["format"]

"""
Tests for structured logging and the observation context.
"""

import json
import logging

from observer.observability import (
    HumanFormatter,
    JSONFormatter,
    ObservationContext,
    configure_logging,
    get_cache_key,
)


def _record(message="Comparing halves", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="observer.compare",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestObservationContext:
    def test_sets_and_resets(self):
        assert get_cache_key() is None
        with ObservationContext("0xabc::v42"):
            assert get_cache_key() == "0xabc::v42"
        assert get_cache_key() is None

    def test_nested(self):
        with ObservationContext("a::1"):
            with ObservationContext("b::2"):
                assert get_cache_key() == "b::2"
            assert get_cache_key() == "a::1"


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "observer.compare"
        assert data["message"] == "Comparing halves"
        assert data["timestamp"].endswith("Z")
        assert "cache_key" not in data

    def test_cache_key_in_context(self):
        with ObservationContext("0xabc::v42"):
            data = json.loads(JSONFormatter().format(_record()))
        assert data["cache_key"] == "0xabc::v42"

    def test_extra_fields(self):
        data = json.loads(JSONFormatter().format(_record(lenses="weekly,yearly")))
        assert data["lenses"] == "weekly,yearly"


class TestHumanFormatter:
    def test_includes_cache_key(self):
        with ObservationContext("0xabc::v42"):
            line = HumanFormatter().format(_record())
        assert "[INFO] observer.compare: [0xabc::v42] Comparing halves" in line


class TestConfigureLogging:
    def test_replaces_handlers(self):
        logger = configure_logging("DEBUG", json_format=True, logger_name="observer.test")
        configure_logging("DEBUG", json_format=True, logger_name="observer.test")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_human_format(self):
        logger = configure_logging("WARNING", json_format=False, logger_name="observer.test")
        assert isinstance(logger.handlers[0].formatter, HumanFormatter)
        assert logger.level == logging.WARNING

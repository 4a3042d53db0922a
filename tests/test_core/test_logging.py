"""Tests for structured logging."""

import json
import logging

from src.core.logging import ConsoleFormatter, JSONFormatter, get_logger


def _record(message: str, context=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="stylesync.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    if context is not None:
        record.context = context
    return record


class TestGetLogger:
    """Test logger naming."""

    def test_strips_src_prefix(self):
        logger = get_logger("src.engine.orchestrator")
        assert logger.name == "stylesync.engine.orchestrator"

    def test_plain_name_is_namespaced(self):
        assert get_logger("main").name == "stylesync.main"


class TestJSONFormatter:
    """Test JSON file format."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record("hello")))
        assert data["level"] == "INFO"
        assert data["module"] == "stylesync.test"
        assert data["message"] == "hello"
        assert "timestamp" in data
        assert "context" not in data

    def test_context_included(self):
        data = json.loads(JSONFormatter().format(_record("hi", {"contact_id": "2"})))
        assert data["context"] == {"contact_id": "2"}


class TestConsoleFormatter:
    """Test console format."""

    def test_context_appended(self):
        line = ConsoleFormatter().format(_record("Draft ready", {"contact_id": "2"}))
        assert "stylesync.test: Draft ready" in line
        assert "[contact_id=2]" in line

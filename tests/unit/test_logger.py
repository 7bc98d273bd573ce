"""Unit tests for logging infrastructure."""

import json
import logging
import sys

from pantry_chef.utils.logger import JSONFormatter, RichTextFormatter, get_logger, logger


def make_record(msg="Test message", level=logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter produces valid JSON output."""

    def test_json_formatter_outputs_valid_json(self):
        """Test that JSONFormatter produces valid JSON."""
        parsed = json.loads(JSONFormatter().format(make_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_includes_provider_fields(self):
        """Test that provider/model/locale extras are emitted."""
        record = make_record(provider="openrouter", model="mistralai/mistral-7b", locale="es")

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["provider"] == "openrouter"
        assert parsed["model"] == "mistralai/mistral-7b"
        assert parsed["locale"] == "es"

    def test_json_formatter_omits_absent_fields(self):
        """Test that records without extras have no provider key."""
        parsed = json.loads(JSONFormatter().format(make_record()))

        assert "provider" not in parsed
        assert "model" not in parsed

    def test_json_formatter_includes_exception_traceback(self):
        """Test that JSONFormatter includes exception traceback when present."""
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))

        assert "ValueError: Test error" in parsed["exception"]


class TestRichTextFormatter:
    """Test RichTextFormatter text output."""

    def test_includes_level_and_message(self):
        output = RichTextFormatter().format(make_record(level=logging.WARNING))

        assert "WARNING" in output
        assert "Test message" in output

    def test_includes_provider_tag(self):
        """Test that the provider extra is rendered as a tag."""
        output = RichTextFormatter().format(make_record(provider="gemini"))

        assert "[gemini] Test message" in output


class TestGetLogger:
    """Test logger factory."""

    def test_get_logger_is_idempotent(self):
        """Test that repeated calls do not stack handlers."""
        first = get_logger("pantry_chef.test_idempotent")
        handlers = len(first.handlers)
        second = get_logger("pantry_chef.test_idempotent")

        assert first is second
        assert len(second.handlers) == handlers == 1

    def test_json_log_type(self, monkeypatch):
        """Test that LOG_TYPE=json selects JSONFormatter."""
        monkeypatch.setenv("LOG_TYPE", "json")
        json_logger = get_logger("pantry_chef.test_json_type")

        assert isinstance(json_logger.handlers[0].formatter, JSONFormatter)

    def test_module_logger_name(self):
        assert logger.name == "pantry_chef"

"""
Tests for the log formatters.
"""
import json
import logging

from msgboard.core.logging import JSONFormatter, TextFormatter


def _record(message="Task completed successfully", extra_data=None):
    record = logging.LogRecord(
        name="msgboard.tasks.statistics_reporter",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    if extra_data is not None:
        record.extra_data = extra_data
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_includes_service_and_structured_fields(self):
        line = JSONFormatter("Message Board Service").format(
            _record(extra_data={"total_messages": 5, "active_messages": 4})
        )

        data = json.loads(line)
        assert data["message"] == "Task completed successfully"
        assert data["service"] == "Message Board Service"
        assert data["total_messages"] == 5
        assert data["active_messages"] == 4

    def test_structured_fields_cannot_replace_reserved_keys(self):
        line = JSONFormatter("svc").format(_record(extra_data={"message": "spoofed", "level": "DEBUG"}))

        data = json.loads(line)
        assert data["message"] == "Task completed successfully"
        assert data["level"] == "INFO"


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_appends_structured_fields(self):
        line = TextFormatter().format(_record(extra_data={"total_messages": 5}))

        assert "Task completed successfully" in line
        assert line.endswith("| total_messages=5")

    def test_plain_record_unchanged(self):
        line = TextFormatter().format(_record())

        assert line.endswith("- Task completed successfully")

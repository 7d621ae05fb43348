"""Structured logging - JSON records carry extras, setup is idempotent."""

import json
import logging

from exercise_tracker.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "exercise_tracker.test", logging.WARNING, __file__, 1,
        "validation error: %s", ("duration",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_core_fields_and_extras():
    payload = json.loads(JSONFormatter().format(
        _record(error_code="validation", path="/api/exercise/add"),
    ))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "exercise_tracker.test"
    assert payload["message"] == "validation error: duration"
    assert payload["error_code"] == "validation"
    assert payload["path"] == "/api/exercise/add"
    assert "user_id" not in payload


def test_setup_logging_replaces_its_own_handler():
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")
    ours = [h for h in logging.root.handlers if h.get_name() == "exercise_tracker"]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
    assert len(logging.root.handlers) <= before + 1
    logging.root.removeHandler(ours[0])

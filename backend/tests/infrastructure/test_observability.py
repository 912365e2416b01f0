"""Structured Logging - JSON formatter fields and idempotent setup."""

import json
import logging

from freezefit.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", **extra):
    record = logging.LogRecord("freezefit.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "freezefit.test"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_json_formatter_includes_known_extras_only():
    out = json.loads(JSONFormatter().format(_record(
        resource="Message", record_id="abc", error_code="RESOURCE_NOT_FOUND",
        unrelated="ignored",
    )))
    assert out["resource"] == "Message"
    assert out["record_id"] == "abc"
    assert out["error_code"] == "RESOURCE_NOT_FOUND"
    assert "unrelated" not in out


def test_json_formatter_keeps_hebrew_readable():
    out = JSONFormatter().format(_record("רמה: כסף"))
    assert "כסף" in out


def test_setup_logging_is_idempotent():
    previous_level = logging.root.level
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "freezefit"]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert logging.root.level == logging.WARNING
    logging.root.removeHandler(ours[0])
    logging.root.setLevel(previous_level)

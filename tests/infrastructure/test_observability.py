"""Structured Logging — tests for the JSON formatter.

Tests cover:
    - Base fields always present
    - Known extra fields surfaced, unknown extras dropped
    - Exception text included when exc_info is set
    - setup_logging installs exactly one handler however often it runs
"""

import json
import logging
import sys

from backoffice.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg: str = "Created park #1", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "backoffice.services", logging.INFO, __file__, 10, msg, None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_base_fields_present():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "backoffice.services"
    assert payload["message"] == "Created park #1"
    assert "timestamp" in payload


def test_known_extra_fields_surfaced():
    payload = json.loads(JSONFormatter().format(
        _record(resource_kind="park", resource_id=1, operation="create"),
    ))
    assert payload["resource_kind"] == "park"
    assert payload["resource_id"] == 1
    assert payload["operation"] == "create"


def test_unknown_extra_fields_dropped():
    payload = json.loads(JSONFormatter().format(_record(email="admin@example.com")))
    assert "email" not in payload


def test_exception_included():
    try:
        raise RuntimeError("store down")
    except RuntimeError:
        record = _record("failed", exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: store down" in payload["exception"]


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging("DEBUG", "text")
        setup_logging("WARNING", "json")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
        root.setLevel(level)

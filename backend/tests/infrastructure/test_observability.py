"""Structured logging: JSON shape and handler replacement."""

import json
import logging
from uuid import uuid4

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "Account created", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    uid = uuid4()
    line = json.loads(JSONFormatter().format(_record(user_id=uid, status_code=201, password="x")))
    assert line["message"] == "Account created"
    assert line["level"] == "INFO"
    assert line["user_id"] == str(uid)
    assert line["status_code"] == 201
    assert "password" not in line


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "household-ledger"]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert logging.root.level == logging.INFO

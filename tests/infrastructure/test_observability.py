"""Observability — JSON log lines and handler setup."""

import json
import logging
import sys

import pytest

from wildwatch.infrastructure.observability import (
    SERVICE_NAME, JSONFormatter, setup_logging,
)


def _record(msg: str = "Device 7 created", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "wildwatch.services.devices", logging.INFO, __file__, 1, msg, None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_line_has_base_fields():
    line = json.loads(JSONFormatter().format(_record()))

    assert line["level"] == "INFO"
    assert line["service"] == SERVICE_NAME
    assert line["logger"] == "wildwatch.services.devices"
    assert line["message"] == "Device 7 created"
    assert "timestamp" in line
    assert "user_id" not in line


def test_context_fields_surface_only_when_set():
    line = json.loads(JSONFormatter(service="wildwatch-test").format(
        _record(user_id="u1", resource_id=7, object_key=None, unrelated="x"),
    ))

    assert line["service"] == "wildwatch-test"
    assert line["user_id"] == "u1"
    assert line["resource_id"] == 7
    assert "object_key" not in line
    assert "unrelated" not in line


def test_exception_is_rendered():
    try:
        raise RuntimeError("disk gone")
    except RuntimeError:
        record = _record("store failed", exc_info=sys.exc_info())

    line = json.loads(JSONFormatter().format(record))

    assert "RuntimeError: disk gone" in line["exception"]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("uvicorn.access").disabled = False


def test_setup_logging_installs_a_single_handler(restore_root_logger):
    before = len(restore_root_logger.handlers)

    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")

    assert len(restore_root_logger.handlers) == before + 1
    assert restore_root_logger.level == logging.WARNING
    assert not isinstance(restore_root_logger.handlers[-1].formatter, JSONFormatter)
    assert logging.getLogger("uvicorn.access").disabled is True


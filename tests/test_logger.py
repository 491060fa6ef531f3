import json
import logging
import sys

from utils.logger import JsonFormatter, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="orchestrator.core",
        level=logging.ERROR,
        pathname=__file__,
        lineno=12,
        msg="Search pipeline failed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_core_fields():
    data = json.loads(JsonFormatter().format(_record()))

    assert data["level"] == "ERROR"
    assert data["logger"] == "orchestrator.core"
    assert data["message"] == "Search pipeline failed"
    assert data["line"] == 12
    assert data["timestamp"].endswith("Z")


def test_json_formatter_merges_extra_fields():
    record = _record(extra_fields={"stage": "fetching", "upstream_status": 503})

    data = json.loads(JsonFormatter().format(record))

    assert data["stage"] == "fetching"
    assert data["upstream_status"] == 503


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    data = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in data["exception"]


def test_get_logger_returns_named_logger():
    assert get_logger("server.app").name == "server.app"

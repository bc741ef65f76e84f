import json
import logging
import sys

import pytest
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from wutup.logging.filters import ContextFilter, set_logging_context
from wutup.logging.logger import (
    CustomJsonFormatter,
    configure_logging,
    get_logger,
    setup_logging,
)
from wutup.settings import WutupBaseSettings


def _record(msg: str = "built %s", args: tuple = ("query",)) -> logging.LogRecord:
    record = logging.LogRecord(
        name="wutup.query_builder.builder",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=20,
        msg=msg,
        args=args,
        exc_info=None,
    )
    record.query = "select * from t"
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    set_logging_context()


def test_formatter_emits_json_with_extra_fields():
    payload = json.loads(CustomJsonFormatter().format(_record()))

    assert payload["message"] == "built query"
    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "wutup.query_builder.builder"
    assert payload["query"] == "select * from t"
    assert "timestamp" in payload
    assert "trace_id" not in payload
    assert "msg" not in payload


def test_formatter_adds_trace_context_inside_span():
    context = SpanContext(
        trace_id=0x1234,
        span_id=0x5678,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )

    with trace.use_span(NonRecordingSpan(context)):
        payload = json.loads(CustomJsonFormatter().format(_record()))

    assert payload["trace_id"] == format(0x1234, "032x")
    assert payload["span_id"] == format(0x5678, "016x")


def test_formatter_includes_exception():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(CustomJsonFormatter().format(record))

    assert "ValueError: bad value" in payload["exception"]


def test_setup_logging_configures_root(restore_root_logger):
    setup_logging("debug")

    assert restore_root_logger.level == logging.DEBUG
    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, CustomJsonFormatter)
    assert any(type(f).__name__ == "ContextFilter" for f in handler.filters)


def test_get_logger_returns_named_logger():
    assert get_logger("wutup.dao").name == "wutup.dao"


def test_configure_logging_applies_settings(restore_root_logger):
    configure_logging(WutupBaseSettings(app_env="qa", log_level="warning"))

    assert restore_root_logger.level == logging.WARNING
    record = _record()
    assert ContextFilter().filter(record)
    assert getattr(record, "environment") == "qa"


def test_configure_logging_defaults_to_application_settings(restore_root_logger, monkeypatch):
    monkeypatch.setattr(
        "wutup.settings.get_settings",
        lambda: WutupBaseSettings(app_env="prod", log_level="error"),
    )

    configure_logging()

    assert restore_root_logger.level == logging.ERROR
    record = _record()
    ContextFilter().filter(record)
    assert getattr(record, "environment") == "prod"

from __future__ import annotations

import json
import logging
import sys

import pytest

from token_exchange.core.logging import (
    _ContainerFormatter,
    _JsonFormatter,
    setup_logging,
)


def _record(
    level: int = logging.INFO, msg: str = "hello", **extra
) -> logging.LogRecord:
    record = logging.LogRecord(
        name="token_exchange.test",
        level=level,
        pathname="exchange.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---- setup_logging ----


def test_setup_logging_sets_root_level() -> None:
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_defaults_to_info_for_unknown_level() -> None:
    setup_logging("nonexistent")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_quiets_third_party_at_debug() -> None:
    setup_logging("debug")
    assert logging.getLogger("uvicorn").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_selects_json_formatter() -> None:
    setup_logging("info", json_format=True)
    (handler,) = logging.getLogger().handlers
    assert isinstance(handler.formatter, _JsonFormatter)


# ---- container formatter ----


def test_container_formatter_excludes_location_for_info() -> None:
    output = _ContainerFormatter().format(_record())
    assert "hello" in output
    assert "[exchange.py:" not in output


def test_container_formatter_includes_location_for_warning() -> None:
    output = _ContainerFormatter().format(_record(logging.WARNING, "rejected"))
    assert "rejected" in output
    assert "[exchange.py:42]" in output


def test_container_formatter_is_not_json() -> None:
    output = _ContainerFormatter().format(_record())
    with pytest.raises(json.JSONDecodeError):
        json.loads(output)


# ---- JSON formatter ----


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(msg="exchange done")))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "token_exchange.test"
    assert parsed["message"] == "exchange done"
    assert "timestamp" in parsed


def test_json_formatter_lifts_exchange_context() -> None:
    record = _record(
        logging.WARNING,
        request_id="req-1",
        client_id="client-a",
        grant_type="authorization_code",
        rfc_error="invalid_grant",
    )
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "req-1"
    assert parsed["client_id"] == "client-a"
    assert parsed["grant_type"] == "authorization_code"
    assert parsed["rfc_error"] == "invalid_grant"


def test_json_formatter_omits_placeholder_request_id() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(request_id="-")))
    assert "request_id" not in parsed


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise LookupError("code vanished")
    except LookupError:
        record = _record(logging.ERROR, "issuer failed")
        record.exc_info = sys.exc_info()
        output = _JsonFormatter().format(record)

    parsed = json.loads(output)
    assert "LookupError: code vanished" in parsed["exception"]

"""Request id context binding and log record stamping."""

import logging

from coop_portal.middleware.request_id import _sanitize_request_id
from coop_portal.shared.telemetry.logging import (
    RequestIdFilter,
    bind_request_id,
    get_request_id,
    reset_request_id,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("search", logging.INFO, __file__, 1, "msg", None, None)


def test_filter_stamps_bound_request_id() -> None:
    token = bind_request_id("req-abc")
    try:
        record = _record()
        assert RequestIdFilter().filter(record)
        assert record.request_id == "req-abc"
    finally:
        reset_request_id(token)
    assert get_request_id() == "-"


def test_unsafe_client_request_id_is_replaced() -> None:
    assert _sanitize_request_id("abc-123") == "abc-123"
    replaced = _sanitize_request_id("bad id\nInjected: yes")
    assert replaced != "bad id\nInjected: yes"
    assert len(replaced) == 32
    assert _sanitize_request_id("x" * 64) == "x" * 64
    assert len(_sanitize_request_id("x" * 65)) == 32

"""Every response carries an X-Request-ID (generated or echoed)."""

from __future__ import annotations

import logging
import uuid

from fastapi.testclient import TestClient

from token_exchange.middleware.request_context import (
    _RequestContextFilter,
    request_id_var,
)


def test_request_id_generated_when_not_provided(client: TestClient) -> None:
    resp = client.get("/health")
    uuid.UUID(resp.headers["x-request-id"])


def test_request_id_echoed_when_provided(client: TestClient) -> None:
    resp = client.get("/health", headers={"X-Request-ID": "my-request-123"})
    assert resp.headers.get("x-request-id") == "my-request-123"


def test_request_id_present_on_token_errors(client: TestClient) -> None:
    resp = client.post(
        "/oauth/token",
        data={
            "grant_type": "password",
            "code": "x",
            "redirect_uri": "http://localhost/cb",
            "client_id": "c",
            "client_secret": "s",
        },
    )
    assert resp.status_code == 400
    assert resp.headers.get("x-request-id") is not None


def test_filter_stamps_current_request_id() -> None:
    record = logging.LogRecord("t", logging.INFO, "f.py", 1, "m", (), None)
    token = request_id_var.set("req-77")
    try:
        _RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-77"  # type: ignore[attr-defined]


def test_filter_defaults_outside_request() -> None:
    record = logging.LogRecord("t", logging.INFO, "f.py", 1, "m", (), None)
    _RequestContextFilter().filter(record)
    assert record.request_id == "-"  # type: ignore[attr-defined]

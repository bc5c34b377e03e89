"""Tests for sensitive data filtering and JSON log formatting."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from admission.core.logging import (
    JsonFormatter,
    SensitiveDataFilter,
    clear_request_id,
    set_request_id,
)


@pytest.fixture
def log_capture():
    logger = logging.getLogger("test_admission_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_raw_client_id_is_redacted(log_capture):
    logger, stream = log_capture

    logger.info(
        "admission.admitted",
        extra={"client_id": "client-a", "client_hash": "abc123", "outcome": "admitted"},
    )

    output = stream.getvalue()
    assert "client-a" not in output
    assert "[REDACTED]" in output
    payload = json.loads(output)
    assert payload["client_hash"] == "abc123"
    assert payload["outcome"] == "admitted"
    assert payload["message"] == "admission.admitted"


def test_nested_headers_are_redacted(log_capture):
    logger, stream = log_capture

    logger.warning(
        "admission.unknown_client",
        extra={"headers": {"X-Client-ID": "client-b", "user-agent": "pytest"}},
    )

    output = stream.getvalue()
    assert "client-b" not in output
    assert "pytest" in output


def test_safe_fields_pass_through(log_capture):
    logger, stream = log_capture

    logger.info("registry.built", extra={"client_count": 3, "capacity": 100, "window_ms": 60000})

    payload = json.loads(stream.getvalue())
    assert payload["client_count"] == 3
    assert payload["capacity"] == 100
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_from_context(log_capture):
    logger, stream = log_capture
    set_request_id("req-42")

    logger.info("admission.admitted")

    assert json.loads(stream.getvalue())["request_id"] == "req-42"

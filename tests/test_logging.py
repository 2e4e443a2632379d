"""Tests for structured logging setup."""

import json
import logging
import sys
from collections.abc import Iterator

import httpx
import pytest

from gplaymusic.bootstrap import GPlayMusicBuilder
from gplaymusic.constants import InterceptorBehaviour
from gplaymusic.interceptors import ErrorInterceptor, InterceptorChain
from gplaymusic.logging import JSONLogFormatter, configure_logging


@pytest.fixture
def restore_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("gplaymusic")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_formatter_emits_json() -> None:
    record = logging.LogRecord("gplaymusic.bootstrap", logging.INFO, __file__, 1, "Client ready (%s)", ("en_US",), None)

    entry = json.loads(JSONLogFormatter().format(record))

    assert entry["level"] == "INFO"
    assert entry["service"] == "gplaymusic"
    assert entry["logger"] == "gplaymusic.bootstrap"
    assert entry["msg"] == "Client ready (en_US)"
    assert "error" not in entry
    assert "method" not in entry


def test_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("gplaymusic", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    entry = json.loads(JSONLogFormatter(service="player").format(record))

    assert entry["service"] == "player"
    assert entry["error"] == "RuntimeError"
    assert "RuntimeError: boom" in entry["traceback"]


def test_error_log_carries_request_fields(caplog: pytest.LogCaptureFixture) -> None:
    """A logged error response renders its method, path and status as keys."""
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": {"message": "boom"}}))
    chain = InterceptorChain(transport, [ErrorInterceptor(InterceptorBehaviour.LOG)])
    client = httpx.Client(base_url="https://mclients.googleapis.com/", transport=chain)

    with caplog.at_level(logging.WARNING, logger="gplaymusic.interceptors"):
        client.get("sj/v2.5/query")

    entry = json.loads(JSONLogFormatter().format(caplog.records[-1]))
    assert entry["method"] == "GET"
    assert entry["path"] == "/sj/v2.5/query"
    assert entry["status_code"] == 500
    assert entry["msg"] == "GET /sj/v2.5/query returned HTTP 500: boom"


def test_bootstrap_transitions_are_logged_in_order(
    builder: GPlayMusicBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG, logger="gplaymusic.bootstrap"):
        builder.build()

    formatter = JSONLogFormatter()
    entries = [json.loads(formatter.format(r)) for r in caplog.records if hasattr(r, "state")]
    assert [e["state"] for e in entries] == [
        "transport_ready",
        "config_fetched",
        "parameters_seeded",
        "device_resolved",
        "ready",
    ]
    assert entries[0]["previous_state"] == "unconfigured"
    assert entries[1]["previous_state"] == "transport_ready"


def test_configure_logging(restore_logger: logging.Logger, capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(logging.DEBUG)

    assert restore_logger.level == logging.DEBUG
    assert len(restore_logger.handlers) == 1
    assert isinstance(restore_logger.handlers[0].formatter, JSONLogFormatter)

    logging.getLogger("gplaymusic.client").debug("hello")
    assert json.loads(capsys.readouterr().out.strip())["msg"] == "hello"

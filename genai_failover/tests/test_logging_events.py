"""Structured logging helpers and the events emitted by the failover loop."""
from __future__ import annotations

import json
import logging

from genai_failover.base.log_support import JsonFormatter, LogContext
from genai_failover.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from genai_failover.base.models import GenerationRequest
from genai_failover.base.timeouts import TimeoutConfig
from genai_failover.mock import ScriptedProviderError, ScriptedTransport
from genai_failover.resilient import ResilientGenerationClient


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> list[dict]:
        return [json.loads(m) for m in self.messages]


def _capturing_logger(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = logging.getLogger(name)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_namespaces_under_base():
    logger = get_logger("resilient.test")
    assert logger.name == "genai.resilient.test"  # nosec B101
    assert logger.propagate  # nosec B101


def test_level_env_applies(monkeypatch):
    monkeypatch.setenv("GENAI_LOG_LEVEL", "ERROR")
    base = get_logger()
    assert base.level == logging.ERROR  # nosec B101
    monkeypatch.setenv("GENAI_LOG_LEVEL", "INFO")
    assert get_logger().level == logging.INFO  # nosec B101


def test_normalized_event_has_required_keys():
    logger, handler = _capturing_logger("genai.test.normalized")
    normalized_log_event(
        logger,
        "attempt.error",
        LogContext(provider="gemini", model="m"),
        phase="attempt",
        attempt=2,
        error_code="quota",
        phase_extra="kept",
        attempt_override=None,
    )
    event = handler.events()[0]
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event  # nosec B101
    assert "tokens" not in event  # nosec B101
    assert event["provider"] == "gemini" and event["model"] == "m"  # nosec B101
    assert "attempt_override" not in event  # nosec B101


def test_log_event_drops_none_unless_asked():
    logger, handler = _capturing_logger("genai.test.plain")
    log_event(logger, "x", a=None, b=1)
    log_event(logger, "y", keep_none=True, a=None)
    first, second = handler.events()
    assert first == {"event": "x", "b": 1}  # nosec B101
    assert second == {"event": "y", "a": None}  # nosec B101


def test_json_formatter_hoists_payload():
    record = logging.LogRecord("genai.t", logging.INFO, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    data = json.loads(JsonFormatter().format(record))
    assert data["event"] == "e" and data["k"] == 1  # nosec B101
    assert "msg" not in data and data["level"] == "INFO"  # nosec B101


def test_configure_logger_adds_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "genai.log"
    base = configure_logger(level="DEBUG", file_path=str(path))
    try:
        assert any(getattr(h, "baseFilename", None) == str(path) for h in base.handlers)  # nosec B101
        assert base.level == logging.DEBUG  # nosec B101
    finally:
        base = configure_logger(level=logging.INFO, file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(path) for h in base.handlers)  # nosec B101


def test_client_emits_lifecycle_events_with_masked_keys(two_keys):
    logger, handler = _capturing_logger("genai.test.client")
    transport = ScriptedTransport(
        {("key-primary-1111", "gemini-2.5-flash"): ScriptedProviderError("429 quota", 429)},
        default='{"ok": 1}',
    )
    client = ResilientGenerationClient(
        transport, environ=two_keys, timeouts=TimeoutConfig(), logger=logger
    )
    client.generate(GenerationRequest(prompt="p"))

    events = handler.events()
    assert [e["event"] for e in events] == [  # nosec B101
        "generate.start",
        "attempt.error",
        "attempt.credential_switch",
        "generate.success",
    ]
    error = events[1]
    assert error["error_code"] == "quota" and error["failure_kind"] == "quota"  # nosec B101
    assert error["credential"] == "…1111"  # nosec B101
    assert events[0]["chain"][0] == "gemini-2.5-flash"  # nosec B101
    assert all("key-primary-1111" not in m and "key-backup-2222" not in m for m in handler.messages)  # nosec B101
    assert len({e["request_id"] for e in events}) == 1  # nosec B101


def test_client_logs_exhaustion(two_keys):
    logger, handler = _capturing_logger("genai.test.exhausted")
    client = ResilientGenerationClient(
        ScriptedTransport(default=ScriptedProviderError("API key not valid", 400)),
        environ=two_keys,
        timeouts=TimeoutConfig(),
        logger=logger,
    )
    client.generate(GenerationRequest(prompt="p"))
    last = handler.events()[-1]
    assert last["event"] == "generate.exhausted"  # nosec B101
    assert last["error_code"] == "validation"  # nosec B101
    assert last["attempt"] == 2  # nosec B101

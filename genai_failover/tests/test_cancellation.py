from __future__ import annotations

import pytest

from genai_failover.base.cancellation import CancellationToken, CancelledError
from genai_failover.base.errors import ErrorCode
from genai_failover.base.models import GenerationRequest
from genai_failover.base.timeouts import TimeoutConfig
from genai_failover.mock import ScriptedProviderError, ScriptedTransport
from genai_failover.resilient import ResilientGenerationClient


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _client(transport, environ, attempt_timeout: float = 30.0, overall=None):
    return ResilientGenerationClient(
        transport,
        environ=environ,
        timeouts=TimeoutConfig(attempt_timeout_seconds=attempt_timeout, overall_timeout_seconds=overall),
    )


def _req() -> GenerationRequest:
    return GenerationRequest(prompt="hello")


# ---- token unit behaviour ----
def test_raise_if_cancelled_carries_reason():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("user closed tab")
    token.cancel("ignored second reason")
    with pytest.raises(CancelledError, match="user closed tab"):
        token.raise_if_cancelled()


def test_raise_if_cancelled_after_deadline():
    clock = _Clock()
    token = CancellationToken.with_timeout(2, clock=clock)
    token.raise_if_cancelled()
    clock.now += 3
    with pytest.raises(CancelledError, match="deadline exceeded"):
        token.raise_if_cancelled()


def test_deadline_expiry_and_remaining():
    clock = _Clock()
    token = CancellationToken.with_timeout(5, clock=clock)
    assert token.remaining() == 5  # nosec B101
    assert not token.cancelled  # nosec B101
    clock.now += 6
    assert token.expired and token.cancelled  # nosec B101
    assert token.remaining() == 0.0  # nosec B101
    assert token.reason == "deadline exceeded"  # nosec B101


def test_unbounded_token_has_no_remaining():
    assert CancellationToken().remaining() is None  # nosec B101


# ---- client integration ----
def test_cancelled_before_start_issues_no_calls(two_keys):
    token = CancellationToken()
    token.cancel("shutdown")
    transport = ScriptedTransport(default='{"a": 1}')
    result = _client(transport, two_keys).generate(_req(), cancellation=token)
    assert result.code is ErrorCode.CANCELLED  # nosec B101
    assert "shutdown" in result.error_message  # nosec B101
    assert transport.calls == [] and result.attempts == 0  # nosec B101


def test_cancel_during_attempt_is_terminal(two_keys):
    token = CancellationToken()

    def _cancel_then_fail(call):
        token.cancel("caller gave up")
        raise ScriptedProviderError("connection reset", 503)

    transport = ScriptedTransport(default=_cancel_then_fail)
    result = _client(transport, two_keys).generate(_req(), cancellation=token)
    assert result.code is ErrorCode.CANCELLED  # nosec B101
    assert len(transport.calls) == 1 and result.attempts == 1  # nosec B101


def test_deadline_passing_mid_loop_stops_retries(two_keys):
    clock = _Clock()
    token = CancellationToken.with_timeout(10, clock=clock)

    def _slow_failure(call):
        clock.now += 11
        raise TimeoutError("deadline exceeded while reading")

    transport = ScriptedTransport(default=_slow_failure)
    result = _client(transport, two_keys).generate(_req(), cancellation=token)
    assert result.code is ErrorCode.CANCELLED  # nosec B101
    assert "deadline exceeded" in result.error_message  # nosec B101
    assert len(transport.calls) == 1  # nosec B101


def test_deadline_bounds_attempt_timeout(two_keys):
    clock = _Clock()
    token = CancellationToken.with_timeout(4, clock=clock)
    transport = ScriptedTransport(default='{"a": 1}')
    _client(transport, two_keys, attempt_timeout=30.0).generate(_req(), cancellation=token)
    assert transport.calls[0].timeout == 4  # nosec B101


def test_attempt_timeout_without_deadline_is_ordinary_failure(two_keys):
    transport = ScriptedTransport(sequence=[TimeoutError("read timed out"), '{"ok": 1}'])
    result = _client(transport, two_keys).generate(_req())
    assert result.ok and result.model_used == "gemini-2.5-flash-lite"  # nosec B101


def test_overall_timeout_config_creates_deadline(two_keys):
    transport = ScriptedTransport(default='{"a": 1}')
    _client(transport, two_keys, attempt_timeout=30.0, overall=10.0).generate(_req())
    assert 0 < transport.calls[0].timeout <= 10.0  # nosec B101


def test_transport_cancelled_error_ends_the_call(two_keys):
    def _abort(call):
        raise CancelledError("stream closed by caller")

    transport = ScriptedTransport(default=_abort)
    result = _client(transport, two_keys).generate(_req())
    assert result.code is ErrorCode.CANCELLED  # nosec B101
    assert "stream closed by caller" in result.error_message  # nosec B101
    assert len(transport.calls) == 1 and result.attempts == 1  # nosec B101

from __future__ import annotations

import json
import types

import pytest

from genai_failover.base.errors import (
    ErrorCode,
    FailureKind,
    GenerationError,
    classify_attempt_error,
    classify_exception,
)
from genai_failover.mock import ScriptedProviderError


class _ApiCoreLike(Exception):
    """Mimics google.genai.errors.APIError: HTTP status on ``code``."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (ScriptedProviderError("boom", status_code=401), FailureKind.AUTH),
        (Exception("API key not valid. Please pass a valid API key."), FailureKind.AUTH),
        (Exception("400 API_KEY_INVALID"), FailureKind.AUTH),
        (_ApiCoreLike("Unauthenticated", 401), FailureKind.AUTH),
        (ScriptedProviderError("slow down", status_code=429), FailureKind.QUOTA),
        (Exception("429 Too Many Requests"), FailureKind.QUOTA),
        (Exception("You exceeded your current quota"), FailureKind.QUOTA),
        (Exception("Resource has been exhausted (e.g. check quota)."), FailureKind.QUOTA),
        (_ApiCoreLike("RESOURCE_EXHAUSTED", 429), FailureKind.QUOTA),
        (ScriptedProviderError("The model is overloaded", status_code=503), FailureKind.OTHER),
        (TimeoutError("read timed out"), FailureKind.OTHER),
        (ValueError("something odd"), FailureKind.OTHER),
    ],
)
def test_failure_kind_table(exc, kind):
    assert classify_attempt_error(exc).kind is kind  # nosec B101


def test_auth_checked_before_quota():
    err = classify_attempt_error(Exception("API key quota exceeded"))
    assert err.kind is FailureKind.AUTH  # nosec B101


def test_local_generation_errors_are_other():
    exc = GenerationError(code=ErrorCode.EMPTY_RESPONSE, message="Empty response from AI", model="m")
    err = classify_attempt_error(exc)
    assert err.kind is FailureKind.OTHER  # nosec B101
    assert err.code is ErrorCode.EMPTY_RESPONSE  # nosec B101
    assert err.message == "Empty response from AI"  # nosec B101


def test_status_extraction_variants():
    assert classify_attempt_error(ScriptedProviderError("x", 429)).http_status == 429  # nosec B101
    resp_style = types.SimpleNamespace(response=types.SimpleNamespace(status_code=401))
    assert classify_exception(resp_style) is ErrorCode.AUTH  # nosec B101
    assert classify_attempt_error(Exception("no status")).http_status is None  # nosec B101


def test_classify_exception_codes():
    assert classify_exception(ScriptedProviderError("x", 503)) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("model not found")) is ErrorCode.NOT_FOUND  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_dump_is_json_with_message_and_status():
    err = classify_attempt_error(ScriptedProviderError("quota hit", 429))
    data = json.loads(err.dump())
    assert data == {  # nosec B101
        "type": "ScriptedProviderError",
        "kind": "quota",
        "code": "quota",
        "status": 429,
        "message": "quota hit",
    }

"""
Error classification helpers for provider attempt failures.

Two views are derived from one exception:

* ``classify_exception`` maps to the fine-grained :class:`ErrorCode` used in
  logs and HTTP payloads.
* ``classify_attempt_error`` maps to the closed :class:`FailureKind` that
  drives the retry loop. Only this module inspects raw provider error shapes;
  the loop never re-reads messages or statuses.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Tuple

from .attempt_error import AttemptError, FailureKind
from .error_code import ErrorCode
from .generation_error import GenerationError

# Attribute paths probed for an HTTP status, in order. google-api-core
# exceptions carry the status in ``code``.
_STATUS_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("status_code",),
    ("status",),
    ("code",),
    ("response", "status_code"),
)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by ``exc`` or ``None``."""
    if isinstance(exc, GenerationError):
        return exc.http_status
    for path in _STATUS_PATHS:
        value: Any = exc
        for attr in path:
            value = getattr(value, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and 100 <= value < 600:
            return value
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.QUOTA,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# Checked in order; auth before quota.
AUTH_MARKERS = ("api key", "api_key_invalid", "unauthenticated", "unauthorized")
QUOTA_MARKERS = (
    "429",
    "quota",
    "resource has been exhausted",
    "resource_exhausted",
    "rate limit",
)

# Message markers for exceptions without a mapped status; first group wins.
_MESSAGE_CODES: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.AUTH, AUTH_MARKERS),
    (ErrorCode.QUOTA, QUOTA_MARKERS),
    (ErrorCode.TIMEOUT, ("timeout", "timed out", "deadline exceeded")),
    (ErrorCode.UNAVAILABLE, ("overloaded", "unavailable", "503")),
    (ErrorCode.NOT_FOUND, ("not found", "is not supported for generatecontent")),
    (ErrorCode.SERVER_ERROR, ("internal error", "server error", "500")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    return next((code for code, markers in _MESSAGE_CODES if any(m in msg for m in markers)), None)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map an exception to the :class:`ErrorCode` used in logs and payloads.

    A ``GenerationError`` keeps its own code and timeout exceptions map to
    ``TIMEOUT``. Otherwise a mapped HTTP status decides, then message markers,
    then ``UNKNOWN``.
    """
    if isinstance(exc, GenerationError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    by_status = _HTTP_STATUS_MAP.get(status) if status is not None else None
    return by_status or _heuristic_from_message(str(exc).lower()) or ErrorCode.UNKNOWN


def _failure_kind(status: Optional[int], msg: str) -> FailureKind:
    if status == 401 or any(m in msg for m in AUTH_MARKERS):
        return FailureKind.AUTH
    if status == 429 or any(m in msg for m in QUOTA_MARKERS):
        return FailureKind.QUOTA
    return FailureKind.OTHER


def classify_attempt_error(exc: BaseException) -> AttemptError:
    """Classify one failed attempt for retry-loop control flow.

    ``AUTH`` and ``QUOTA`` are properties of the credential/account; anything
    else (overload, server errors, timeouts, empty or unparseable output) is
    ``OTHER`` and tied to the model that was tried.

    Parameters
    ----------
    exc: BaseException
        Exception raised by the transport or by local response validation.

    Returns
    -------
    AttemptError
        Frozen classification record; the original exception is not retained.
    """
    message = str(exc) or exc.__class__.__name__
    status = _extract_status(exc)
    if isinstance(exc, GenerationError):
        kind = FailureKind.OTHER
    else:
        kind = _failure_kind(status, message.lower())
    return AttemptError(
        kind=kind,
        message=message,
        http_status=status,
        code=classify_exception(exc),
        error_type=exc.__class__.__name__,
    )


__all__ = [
    "classify_attempt_error",
    "classify_exception",
    "AUTH_MARKERS",
    "QUOTA_MARKERS",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]

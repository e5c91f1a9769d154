"""
Normalized generation error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the resilient client, the
transports and the service layer. Values are lowercase snake_case and are
considered a stable public contract for logging and HTTP payloads.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    QUOTA = "quota"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    UNAVAILABLE = "unavailable"
    SERVER_ERROR = "server_error"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    EMPTY_RESPONSE = "empty_response"
    NO_CREDENTIALS = "no_credentials"
    EXHAUSTED = "exhausted"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

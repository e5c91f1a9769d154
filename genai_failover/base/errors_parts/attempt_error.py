"""
Classification of a single failed attempt.

``AttemptError`` is internal to the retry loop: it drives the
switch-model/switch-credential decision and becomes the basis of the terminal
failure when every pair is exhausted.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .error_code import ErrorCode


class FailureKind(str, Enum):
    """Closed set of control-flow classes for attempt failures."""

    AUTH = "auth"
    QUOTA = "quota"
    OTHER = "other"


@dataclass(frozen=True)
class AttemptError:
    """Classified attempt failure.

    Attributes:
        kind: Control-flow class (auth, quota, other).
        message: Provider message or local failure description.
        http_status: HTTP-like status when the provider reported one.
        code: Finer-grained :class:`ErrorCode` for logs.
        error_type: Class name of the underlying exception.
    """

    kind: FailureKind
    message: str
    http_status: Optional[int] = None
    code: ErrorCode = ErrorCode.UNKNOWN
    error_type: str = "Exception"

    def dump(self) -> str:
        """Serialize the error to a JSON string for diagnostics."""
        return json.dumps(
            {
                "type": self.error_type,
                "kind": self.kind.value,
                "code": self.code.value,
                "status": self.http_status,
                "message": self.message,
            },
            ensure_ascii=False,
        )


__all__ = ["FailureKind", "AttemptError"]

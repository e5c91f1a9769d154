"""
Structured generation error exception type.

Raised inside a single attempt for conditions the provider SDK does not report
as errors itself (empty text, unparseable or invalid JSON). The retry loop
absorbs it like any other attempt failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class GenerationError(Exception):
    """Represents a structured attempt failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        model: Optional model id associated with the failure.
        http_status: HTTP-like status when one is known.
        raw: Leading slice of the provider text that failed to decode.
    """

    code: ErrorCode
    message: str
    model: Optional[str] = None
    http_status: Optional[int] = None
    raw: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return the human-readable message."""
        return self.message


__all__ = ["GenerationError"]

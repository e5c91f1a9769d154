"""
Terminal outcome of ``ResilientGenerationClient.generate``.

Exactly one of :class:`GenerationSuccess` or :class:`GenerationFailure` is
returned per call. Both carry ``ok`` so callers can branch without
``isinstance`` checks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, TypeVar, Union

from ..errors_parts.error_code import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class GenerationSuccess(Generic[T]):
    """Successful generation.

    Attributes:
        parsed_data: Decoded JSON payload (or validated pydantic model).
        raw_text: Raw provider text the payload was parsed from.
        model_used: Model id that produced the payload.
        credential_index: Position of the credential in the credential set.
        attempts: Number of provider calls issued, including this one.
    """

    parsed_data: T
    raw_text: str
    model_used: str
    credential_index: int = 0
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        data = self.parsed_data
        if hasattr(data, "model_dump"):
            data = data.model_dump()
        return {
            "ok": True,
            "data": data,
            "raw": self.raw_text,
            "model_used": self.model_used,
            "attempts": self.attempts,
        }


@dataclass(frozen=True)
class GenerationFailure:
    """Failed generation.

    Attributes:
        error_message: Human-readable message of the last attempt error.
        raw_dump: JSON dump of the last attempt error (empty when no attempt ran).
        code: Terminal failure code (``no_credentials``, ``cancelled``, ``exhausted``).
        attempts: Number of provider calls issued before giving up.
    """

    error_message: str
    raw_dump: str = ""
    code: ErrorCode = ErrorCode.EXHAUSTED
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": False,
            "error": self.error_message,
            "code": self.code.value,
            "raw": self.raw_dump,
            "attempts": self.attempts,
        }


GenerationResult = Union[GenerationSuccess[T], GenerationFailure]


__all__ = ["GenerationSuccess", "GenerationFailure", "GenerationResult"]

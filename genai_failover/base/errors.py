"""Unified generation error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``genai_failover.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.generation_error import GenerationError
from .errors_parts.attempt_error import AttemptError, FailureKind
from .errors_parts.classification import classify_attempt_error, classify_exception

__all__ = [
    "ErrorCode",
    "GenerationError",
    "AttemptError",
    "FailureKind",
    "classify_attempt_error",
    "classify_exception",
]

"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `genai_failover.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .generation_error import GenerationError
from .attempt_error import AttemptError, FailureKind
from .classification import classify_attempt_error, classify_exception

__all__ = [
    "ErrorCode",
    "GenerationError",
    "AttemptError",
    "FailureKind",
    "classify_attempt_error",
    "classify_exception",
]

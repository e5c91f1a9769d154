"""Cancellation error type.

Defines ``CancelledError``, raised by ``CancellationToken.raise_if_cancelled``.
The resilient client raises it before each attempt and turns it into a
``GenerationFailure`` coded ``cancelled``, so callers never see it escape
``generate``.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a generation call observes cancellation or an expired deadline.

    Distinguishes caller-driven termination from attempt failures so the retry
    loop stops instead of advancing to the next (credential, model) pair.
    """


__all__ = ["CancelledError"]

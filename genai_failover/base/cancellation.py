"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose cancellation constructs via the canonical
``genai_failover.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` carries an explicit cancel flag and an optional
  deadline; the resilient client checks it before every attempt and uses its
  remaining budget to bound each provider call.
- ``CancelledError`` is raised by ``CancellationToken.raise_if_cancelled``; the
  client catches it and returns a ``cancelled`` failure instead.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]

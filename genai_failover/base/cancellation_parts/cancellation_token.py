"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the resilient client to stop a
generation call early, either on an explicit ``cancel()`` or when a caller
deadline elapses.
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Callable, Optional

from .cancelled_error import CancelledError
from .state import State

DEADLINE_EXCEEDED_REASON = "deadline exceeded"


class CancellationToken:
    """A cooperative cancellation token with an optional deadline.

    Thread-safe: one thread may ``cancel`` while the generation loop polls
    ``raise_if_cancelled`` from another. The clock is injectable so deadlines
    can be driven deterministically.
    """

    def __init__(
        self,
        *,
        deadline: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._state = State(deadline=deadline)
        self._lock = Lock()
        self._clock = clock

    @classmethod
    def with_timeout(
        cls, seconds: float, *, clock: Callable[[], float] = time.monotonic
    ) -> "CancellationToken":
        """Create a token whose deadline is ``seconds`` from now."""
        return cls(deadline=clock() + seconds, clock=clock)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested or the deadline has passed."""
        return self._state.cancelled or self.expired

    @property
    def expired(self) -> bool:
        """Whether the deadline (if any) has elapsed."""
        deadline = self._state.deadline
        return deadline is not None and self._clock() >= deadline

    @property
    def deadline(self) -> Optional[float]:
        return self._state.deadline

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time, or the deadline marker."""
        if self._state.reason is not None:
            return self._state.reason
        return DEADLINE_EXCEEDED_REASON if self.expired else None

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when unbounded."""
        deadline = self._state.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - self._clock())

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; the first reason given is kept."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if cancelled or past the deadline."""
        if self.cancelled:
            raise CancelledError(self.reason or "cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, deadline={self._state.deadline!r})"
        )


__all__ = ["CancellationToken", "DEADLINE_EXCEEDED_REASON"]

"""Timeout configuration for provider attempts.

Centralizes the per-attempt timeout applied to every provider call and the
helper that narrows it to a caller's remaining cancellation budget.

Supported environment variables (all optional, positive floats):
    GENAI_ATTEMPT_TIMEOUT_SECONDS   per-attempt network timeout (default 60)
    GENAI_OVERALL_TIMEOUT_SECONDS   default whole-call deadline (unset = none)

Values are parsed once and cached; the cache refreshes when the variables
change so tests can adjust them with ``monkeypatch.setenv``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .cancellation import CancellationToken

ATTEMPT_TIMEOUT_ENV = "GENAI_ATTEMPT_TIMEOUT_SECONDS"
OVERALL_TIMEOUT_ENV = "GENAI_OVERALL_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        attempt_timeout_seconds: Upper bound for a single provider call.
        overall_timeout_seconds: Optional default deadline for a whole
            ``generate`` call when the caller supplies no token.
    """

    attempt_timeout_seconds: float = 60.0
    overall_timeout_seconds: float | None = None


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = f"{os.getenv(ATTEMPT_TIMEOUT_ENV, '')}/{os.getenv(OVERALL_TIMEOUT_ENV, '')}"
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        attempt_timeout_seconds=_parse_env_float(ATTEMPT_TIMEOUT_ENV, defaults.attempt_timeout_seconds)
        or defaults.attempt_timeout_seconds,
        overall_timeout_seconds=_parse_env_float(OVERALL_TIMEOUT_ENV, defaults.overall_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def attempt_timeout(config: TimeoutConfig, token: Optional[CancellationToken]) -> float:
    """Return the timeout for the next attempt.

    The configured per-attempt timeout, narrowed to the token's remaining
    budget when the token carries a deadline.
    """
    budget = config.attempt_timeout_seconds
    if token is not None:
        remaining = token.remaining()
        if remaining is not None:
            budget = min(budget, remaining)
    return budget


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "attempt_timeout",
    "ATTEMPT_TIMEOUT_ENV",
    "OVERALL_TIMEOUT_ENV",
]

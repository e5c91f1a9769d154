"""genai_failover.config.env
=========================

Environment variable names and helpers for Gemini credentials.

Purpose
-------
- Single source of truth for the primary/backup credential variable names.
- Read credentials from an environment mapping on every call (never cached),
  so rotating a key in the environment takes effect on the next request.
- Load an optional ``.env`` file once, without clobbering real values.

Failure Modes
-------------
Helpers never raise on unset variables; they return ``None`` and let the
caller decide (the resilient client fails fast when nothing is configured).
"""

from __future__ import annotations

import os
from typing import Dict, List, Mapping, Optional, Tuple

PRIMARY_KEY_ENV = "GOOGLE_GENAI_API_KEY"  # pragma: allowlist secret - env var name
BACKUP_KEY_ENV = "GOOGLE_GENAI_API_KEY_BACKUP"  # pragma: allowlist secret - env var name

# Ordered credential sources: (label, env var name)
CREDENTIAL_ENV_VARS: Tuple[Tuple[str, str], ...] = (
    ("primary", PRIMARY_KEY_ENV),
    ("backup", BACKUP_KEY_ENV),
)

DOTENV_FILE_ENV = "DOTENV_FILE"
USE_MOCKS_ENV = "GENAI_USE_MOCKS"

_DOTENV_LOADED = False


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'your-api-key', 'example',
    or consists only of asterisks (a masked value echoed back by a UI). The
    check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    if v and set(v) == {"*"}:
        return True
    return (
        "placeholder" in v
        or "changeme" in v
        or "your-api-key" in v
        or "example" in v
    )


def clean_credential(val: Optional[str]) -> Optional[str]:
    """Return a trimmed usable credential or ``None`` for empty/placeholder values."""
    if val is None:
        return None
    v = str(val).strip()
    if not v or is_placeholder(v):
        return None
    return v


def read_env_credentials(environ: Optional[Mapping[str, str]] = None) -> List[Tuple[str, str]]:
    """Return ``(label, credential)`` pairs configured in the environment.

    Parameters
    ----------
    environ: Optional[Mapping[str, str]]
        Mapping to read; defaults to ``os.environ``. Read on every call.

    Returns
    -------
    List[Tuple[str, str]]
        Usable credentials in priority order (primary, then backup).
    """
    env = os.environ if environ is None else environ
    out: List[Tuple[str, str]] = []
    for label, name in CREDENTIAL_ENV_VARS:
        if value := clean_credential(env.get(name)):
            out.append((label, value))
    return out


def mask_credential(val: Optional[str]) -> str:
    """Return a log-safe representation showing only the last four characters."""
    if not val:
        return "-"
    return f"…{val[-4:]}" if len(val) > 4 else "…"


def use_mocks(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Whether the scripted mock transport should replace the real SDK."""
    env = os.environ if environ is None else environ
    return str(env.get(USE_MOCKS_ENV, "")).strip().lower() in {"1", "true", "yes", "on"}


def _parse_dotenv(text: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export ") :]
        k, v = line.split("=", 1)
        k = k.strip()
        if k:
            values[k] = v.strip().strip('"').strip("'")
    return values


def load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Existing environment variables are only replaced when their
    current value looks like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    try:
        if not os.path.isfile(path):
            return
        with open(path, "r", encoding="utf-8") as fh:
            values = _parse_dotenv(fh.read())
        for k, v in values.items():
            if k not in os.environ or is_placeholder(os.environ.get(k)):
                os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


__all__ = [
    "PRIMARY_KEY_ENV",
    "BACKUP_KEY_ENV",
    "CREDENTIAL_ENV_VARS",
    "USE_MOCKS_ENV",
    "is_placeholder",
    "clean_credential",
    "read_env_credentials",
    "mask_credential",
    "use_mocks",
    "load_dotenv_once",
]

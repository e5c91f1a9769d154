"""Unified configuration layer.

Goals
-----
* Centralize defaults (default model, temperature, attempt timeout).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) pointed to by GENAI_CONFIG_FILE
    3. Environment variables (GENAI_DEFAULT_MODEL, GENAI_TEMPERATURE,
       GENAI_ATTEMPT_TIMEOUT_SECONDS)
    4. In-code overrides passed to ``get_genai_config``
* Credentials are deliberately *not* part of this merged view: they are read
  from the environment on every generation call (see ``config.env``).

External Config File (Optional)
-------------------------------
```
default_model: gemini-2.5-flash
temperature: 0.4
attempt_timeout_seconds: 30
```

Public API
----------
* get_genai_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from .defaults import (
    ATTEMPT_DEFAULT_TIMEOUT_SECONDS,
    GEMINI_DEFAULT_MODEL,
    GENERATION_DEFAULT_TEMPERATURE,
)
from .env import load_dotenv_once

CONFIG_FILE_ENV = "GENAI_CONFIG_FILE"

DEFAULTS: Dict[str, Any] = {
    "default_model": GEMINI_DEFAULT_MODEL,
    "temperature": GENERATION_DEFAULT_TEMPERATURE,
    "attempt_timeout_seconds": ATTEMPT_DEFAULT_TIMEOUT_SECONDS,
}

# field -> (env var, parser)
ENV_FIELD_MAP: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "default_model": ("GENAI_DEFAULT_MODEL", str),
    "temperature": ("GENAI_TEMPERATURE", float),
    "attempt_timeout_seconds": ("GENAI_ATTEMPT_TIMEOUT_SECONDS", float),
}


_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the external config file (JSON first, then YAML)."""
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = {k: v for k, v in data.items() if k in DEFAULTS} if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, (name, parser) in ENV_FIELD_MAP.items():
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            continue
        try:
            out[field] = parser(raw.strip())
        except ValueError:
            continue
    return out


def get_genai_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged generation configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def reset_config_cache() -> None:
    """Forget the cached external config file (used by tests)."""
    global _FILE_CACHE
    _FILE_CACHE = None


__all__ = [
    "get_genai_config",
    "reset_config_cache",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]

"""Pytest configuration for the genai_failover test suite.

Every test runs with a scrubbed environment: no real credentials, no config
file, no ``.env`` pickup and mocks disabled. Tests that need keys pass an
explicit ``environ`` mapping to the client instead of touching ``os.environ``.
"""

from __future__ import annotations

from typing import Dict, Iterator

import pytest

from genai_failover.config import reset_config_cache
from genai_failover.config import env as env_mod
from genai_failover.registry import ModelRegistry

_SCRUBBED = (
    "GOOGLE_GENAI_API_KEY",
    "GOOGLE_GENAI_API_KEY_BACKUP",
    "GENAI_USE_MOCKS",
    "GENAI_CONFIG_FILE",
    "GENAI_DEFAULT_MODEL",
    "GENAI_TEMPERATURE",
    "GENAI_ATTEMPT_TIMEOUT_SECONDS",
    "GENAI_OVERALL_TIMEOUT_SECONDS",
    "GENAI_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove credential/config variables and disable ``.env`` loading."""
    for name in _SCRUBBED:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    monkeypatch.setattr(env_mod, "_DOTENV_LOADED", True)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def registry() -> ModelRegistry:
    """Registry over the built-in catalog."""
    return ModelRegistry()


@pytest.fixture()
def two_keys() -> Dict[str, str]:
    """Environment mapping with a primary and a backup key."""
    return {"GOOGLE_GENAI_API_KEY": "key-primary-1111", "GOOGLE_GENAI_API_KEY_BACKUP": "key-backup-2222"}

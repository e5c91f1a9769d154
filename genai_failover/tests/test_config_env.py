from __future__ import annotations

import json
import os

import pytest

from genai_failover.config import DEFAULTS, get_genai_config, reset_config_cache
from genai_failover.config import env as env_mod
from genai_failover.config.env import load_dotenv_once, use_mocks


def test_defaults_when_nothing_configured():
    assert get_genai_config() == DEFAULTS  # nosec B101
    assert DEFAULTS["default_model"] == "gemini-2.5-flash"  # nosec B101


def test_merge_order_file_env_overrides(monkeypatch, tmp_path):
    cfg_file = tmp_path / "genai.yaml"
    cfg_file.write_text("default_model: gemini-3.0-pro\ntemperature: 0.1\nunknown_key: 1\n", encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(cfg_file))
    reset_config_cache()

    cfg = get_genai_config()
    assert cfg["default_model"] == "gemini-3.0-pro"  # nosec B101
    assert cfg["temperature"] == 0.1  # nosec B101
    assert "unknown_key" not in cfg  # nosec B101

    monkeypatch.setenv("GENAI_TEMPERATURE", "0.9")
    assert get_genai_config()["temperature"] == 0.9  # nosec B101

    cfg = get_genai_config({"temperature": 0.0, "default_model": None})
    assert cfg["temperature"] == 0.0  # nosec B101
    assert cfg["default_model"] == "gemini-3.0-pro"  # nosec B101


def test_json_config_file(monkeypatch, tmp_path):
    cfg_file = tmp_path / "genai.json"
    cfg_file.write_text(json.dumps({"attempt_timeout_seconds": 15}), encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(cfg_file))
    reset_config_cache()
    assert get_genai_config()["attempt_timeout_seconds"] == 15  # nosec B101


def test_bad_env_values_ignored(monkeypatch):
    monkeypatch.setenv("GENAI_TEMPERATURE", "warm")
    assert get_genai_config()["temperature"] == DEFAULTS["temperature"]  # nosec B101


def test_dotenv_loaded_once_without_clobbering(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "# comment\nexport GOOGLE_GENAI_API_KEY=\"from-dotenv-1111\"\nGENAI_DEFAULT_MODEL=gemini-3-pro\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.setenv("GENAI_DEFAULT_MODEL", "gemini-2.5-flash-lite")
    monkeypatch.setattr(env_mod, "_DOTENV_LOADED", False)
    monkeypatch.delenv("GOOGLE_GENAI_API_KEY", raising=False)
    try:
        load_dotenv_once()
        assert os.environ["GOOGLE_GENAI_API_KEY"] == "from-dotenv-1111"  # nosec B101
        assert os.environ["GENAI_DEFAULT_MODEL"] == "gemini-2.5-flash-lite"  # nosec B101
    finally:
        os.environ.pop("GOOGLE_GENAI_API_KEY", None)


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("true", True), ("", False), ("0", False)])
def test_use_mocks_flag(value, expected):
    assert use_mocks({"GENAI_USE_MOCKS": value}) is expected  # nosec B101

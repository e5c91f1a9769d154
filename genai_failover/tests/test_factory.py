from __future__ import annotations

import pytest

from genai_failover.base.models import GenerationRequest
from genai_failover.factory import UnknownTransportError, build_default_client, create_transport
from genai_failover.gemini import GeminiTransport
from genai_failover.mock import ScriptedTransport
from genai_failover.registry import RegistryConfigError


def test_gemini_by_default():
    assert isinstance(create_transport(environ={}), GeminiTransport)  # nosec B101


def test_mock_mode_overrides_provider():
    t = create_transport("gemini", environ={"GENAI_USE_MOCKS": "1"})
    assert isinstance(t, ScriptedTransport)  # nosec B101


def test_unknown_transport():
    with pytest.raises(UnknownTransportError):
        create_transport("openai", environ={})


def test_build_default_client_uses_config(monkeypatch):
    monkeypatch.setenv("GENAI_DEFAULT_MODEL", "gemini-3.0-pro")
    monkeypatch.setenv("GENAI_ATTEMPT_TIMEOUT_SECONDS", "9")
    env = {"GENAI_USE_MOCKS": "1", "GOOGLE_GENAI_API_KEY": "mock-key-0001"}
    client = build_default_client(environ=env)
    assert client.registry.default_model_id == "gemini-3.0-pro"  # nosec B101
    assert isinstance(client.transport, ScriptedTransport)  # nosec B101

    result = client.generate(GenerationRequest(prompt="hi"))
    # bundled fixture fails 3.0-pro with a quota error; the single key is then spent
    assert not result.ok and result.attempts == 1  # nosec B101
    assert client.transport.calls[0].timeout == 9.0  # nosec B101


def test_unknown_configured_default_aborts_construction():
    with pytest.raises(RegistryConfigError):
        build_default_client({"default_model": "gemini-0.1-nano"}, transport=ScriptedTransport())

"""Transport and client factory.

Purpose
-------
Composition root: merges configuration, builds the registry, picks a
transport and wires them into a :class:`ResilientGenerationClient`.
Transports are imported lazily with ``importlib`` so importing this module
never pulls in the Gemini SDK.

Mock mode
---------
When ``GENAI_USE_MOCKS`` is truthy, ``create_transport`` returns the scripted
offline transport regardless of the requested provider.
"""
from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple

from .base.interfaces import GenerationTransport
from .base.timeouts import TimeoutConfig, get_timeout_config
from .config import get_genai_config
from .config.env import use_mocks
from .registry import ModelRegistry
from .resilient import ResilientGenerationClient


class UnknownTransportError(Exception):
    """Raised when a transport name is not registered or cannot be built."""


# name -> (module path, class name)
_TRANSPORTS: Dict[str, Tuple[str, str]] = {
    "gemini": ("genai_failover.gemini.transport", "GeminiTransport"),
    "mock": ("genai_failover.mock.transport", "ScriptedTransport"),
}


def create_transport(
    provider: str = "gemini",
    *,
    environ: Optional[Mapping[str, str]] = None,
    **kwargs: Any,
) -> GenerationTransport:
    """Instantiate a transport by canonical name.

    Raises
    ------
    UnknownTransportError
        For unregistered names or when the module/class cannot be loaded.
    """
    name = (provider or "").strip().lower()
    if use_mocks(environ):
        name = "mock"
    if name not in _TRANSPORTS:
        raise UnknownTransportError(f"unknown transport: {provider!r}")
    module_path, class_name = _TRANSPORTS[name]
    try:
        module = import_module(module_path)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise UnknownTransportError(f"failed to load transport {name!r}: {e}") from e
    if name == "mock" and not kwargs:
        return cls.from_fixture()
    return cls(**kwargs)


def build_default_client(
    overrides: Optional[Dict[str, Any]] = None,
    *,
    transport: Optional[GenerationTransport] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ResilientGenerationClient:
    """Wire config -> registry -> transport -> client.

    An unknown ``default_model`` in the merged config raises
    ``RegistryConfigError`` here, at construction, never per request.
    """
    cfg = get_genai_config(overrides)
    registry = ModelRegistry(default_model_id=str(cfg["default_model"]))
    env_timeouts = get_timeout_config()
    timeouts = TimeoutConfig(
        attempt_timeout_seconds=float(cfg["attempt_timeout_seconds"]),
        overall_timeout_seconds=env_timeouts.overall_timeout_seconds,
    )
    return ResilientGenerationClient(
        transport or create_transport(environ=environ),
        registry,
        environ=environ,
        timeouts=timeouts,
    )


__all__ = ["create_transport", "build_default_client", "UnknownTransportError"]

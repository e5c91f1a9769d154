"""Offline transport used when ``GENAI_USE_MOCKS`` is set and in tests."""
from .transport import ScriptedProviderError, ScriptedTransport, TransportCall, UnscriptedCallError

__all__ = ["ScriptedTransport", "ScriptedProviderError", "TransportCall", "UnscriptedCallError"]

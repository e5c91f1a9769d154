"""GenerationTransport Protocol (provider call boundary).

Defines the single call the resilient client makes per attempt. Transports
map the arguments onto an SDK call and return the raw response text.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class GenerationTransport(Protocol):
    """Minimal interface for provider transports.

    Failure handling: raise on any provider failure. The exception's message
    and, where available, a numeric ``status``/``status_code``/``code``
    attribute are what the retry loop classifies. Return an empty string (not
    an exception) when the provider answers without text.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"gemini"``."""
        ...

    def generate(
        self,
        *,
        credential: str,
        model: str,
        prompt: str,
        temperature: float,
        response_schema: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Issue one JSON-mode generation call and return the response text."""
        ...


__all__ = ["GenerationTransport"]

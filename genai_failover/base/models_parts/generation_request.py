"""
GenerationRequest DTO for a single structured generation call.

The request carries the prompt text and sampling hints. Credentials and model
overrides are per-call keyword arguments of
``ResilientGenerationClient.generate`` rather than request fields so the same
request can be replayed under different accounts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_TEMPERATURE = 0.7


@dataclass
class GenerationRequest:
    """Normalized generation request.

    Attributes:
        prompt: Prompt text sent verbatim to the provider (must be non-empty).
        preferred_model_id: Optional preferred model (saved user setting).
        temperature: Sampling temperature; ``0.0`` is honoured as given.
        response_schema: Optional schema the provider uses to shape JSON output.

    Methods:
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    prompt: str
    preferred_model_id: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    response_schema: Optional[Any] = None

    def __post_init__(self) -> None:
        if not isinstance(self.prompt, str) or not self.prompt.strip():
            raise ValueError("prompt must be a non-empty string")
        if self.temperature is None:
            self.temperature = DEFAULT_TEMPERATURE

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "prompt": self.prompt,
            "preferred_model_id": self.preferred_model_id,
            "temperature": self.temperature,
            "response_schema": self.response_schema,
        }


__all__ = ["GenerationRequest", "DEFAULT_TEMPERATURE"]

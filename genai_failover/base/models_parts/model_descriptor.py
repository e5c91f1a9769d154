"""
Model catalog entries.

``ModelDescriptor`` identifies one addressable Gemini model together with its
capability metadata and an optional forward pointer to the model tried next
when it is unavailable. Entries are frozen: the catalog is built once at import
time and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ModelGeneration(str, Enum):
    """Ordered generation tag used for grouping and filtering only."""

    GEN_3_0 = "3.0"
    GEN_2_5 = "2.5"
    GEN_2_0 = "2.0"
    GEN_1_5 = "1.5"

    @property
    def rank(self) -> float:
        """Numeric rank; higher is newer."""
        return float(self.value)


@dataclass(frozen=True)
class ModelCapabilities:
    """Capability and pricing metadata for a model.

    Attributes:
        max_context_tokens: Context window size (tokens), strictly positive.
        cost_per_million_input_tokens: USD per one million prompt tokens.
        cost_per_million_output_tokens: USD per one million completion tokens.
        rate_limit_per_minute: Requests per minute on the free tier (0 = unknown).
    """

    max_context_tokens: int
    cost_per_million_input_tokens: float
    cost_per_million_output_tokens: float
    rate_limit_per_minute: int

    def __post_init__(self) -> None:
        if self.max_context_tokens <= 0:
            raise ValueError("max_context_tokens must be > 0")
        if self.cost_per_million_input_tokens < 0 or self.cost_per_million_output_tokens < 0:
            raise ValueError("token costs must be >= 0")
        if self.rate_limit_per_minute < 0:
            raise ValueError("rate_limit_per_minute must be >= 0")


@dataclass(frozen=True)
class ModelDescriptor:
    """A single static catalog entry.

    Attributes:
        id: Provider model identifier (e.g. ``"gemini-2.5-flash"``).
        display_name: Human label; presentation only.
        generation: Generation tag (see :class:`ModelGeneration`).
        capabilities: Capability/pricing metadata.
        fallback_model_id: Id of the model to try next, if any.
        description: Optional one-line description.
    """

    id: str
    display_name: str
    generation: ModelGeneration
    capabilities: ModelCapabilities
    fallback_model_id: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the entry."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "generation": self.generation.value,
            "capabilities": {
                "max_context_tokens": self.capabilities.max_context_tokens,
                "cost_per_million_input_tokens": self.capabilities.cost_per_million_input_tokens,
                "cost_per_million_output_tokens": self.capabilities.cost_per_million_output_tokens,
                "rate_limit_per_minute": self.capabilities.rate_limit_per_minute,
            },
            "fallback_model_id": self.fallback_model_id,
            "description": self.description,
        }


__all__ = ["ModelGeneration", "ModelCapabilities", "ModelDescriptor"]

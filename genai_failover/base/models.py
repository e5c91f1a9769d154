"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``genai_failover.base.models_parts`` so callers have a single import path.
"""

from .models_parts.model_descriptor import ModelCapabilities, ModelDescriptor, ModelGeneration
from .models_parts.generation_request import DEFAULT_TEMPERATURE, GenerationRequest
from .models_parts.generation_result import (
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
)

__all__ = [
    "ModelCapabilities",
    "ModelDescriptor",
    "ModelGeneration",
    "DEFAULT_TEMPERATURE",
    "GenerationRequest",
    "GenerationFailure",
    "GenerationResult",
    "GenerationSuccess",
]

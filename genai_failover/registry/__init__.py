"""Static model catalog and the pure policy functions over it.

This package performs no I/O and never imports a transport or SDK.
"""
from .catalog import DEFAULT_MODEL_ID, GEMINI_MODELS, LEGACY_ALIASES, OVERRIDE_CHAINS
from .model_registry import (
    GENERATION_MIGRATIONS,
    GenerationMigration,
    ModelRegistry,
    get_default_registry,
    normalize_preference,
)
from .registry_error import ModelNotFoundError, ModelRegistryError, RegistryConfigError

__all__ = [
    "ModelRegistry",
    "GenerationMigration",
    "GENERATION_MIGRATIONS",
    "get_default_registry",
    "normalize_preference",
    "ModelRegistryError",
    "ModelNotFoundError",
    "RegistryConfigError",
    "DEFAULT_MODEL_ID",
    "GEMINI_MODELS",
    "LEGACY_ALIASES",
    "OVERRIDE_CHAINS",
]

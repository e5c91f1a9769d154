"""Static Gemini model catalog.

The catalog is an immutable tuple built once at import time. Each entry may
point at a ``fallback_model_id``; following those links from a starting model
yields its fallback chain. Tier-defining models can instead declare a
hand-authored chain in ``OVERRIDE_CHAINS``.

Costs are USD per one million tokens. ``rate_limit_per_minute`` reflects the
free tier.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from ..base.models import ModelCapabilities, ModelDescriptor, ModelGeneration
from ..config.defaults import GEMINI_DEFAULT_MODEL

GEMINI_3_0_PRO = "gemini-3.0-pro"
GEMINI_2_5_FLASH = "gemini-2.5-flash"
GEMINI_2_5_FLASH_LITE = "gemini-2.5-flash-lite"
GEMINI_2_0_FLASH_EXP = "gemini-2.0-flash-exp"
GEMINI_1_5_PRO = "gemini-1.5-pro"
GEMINI_1_5_FLASH = "gemini-1.5-flash"
GEMINI_1_5_FLASH_8B = "gemini-1.5-flash-8b"

DEFAULT_MODEL_ID = GEMINI_DEFAULT_MODEL


GEMINI_MODELS: Tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id=GEMINI_3_0_PRO,
        display_name="Gemini 3.0 Pro",
        generation=ModelGeneration.GEN_3_0,
        capabilities=ModelCapabilities(
            max_context_tokens=2_000_000,
            cost_per_million_input_tokens=1.25,
            cost_per_million_output_tokens=3.75,
            rate_limit_per_minute=60,
        ),
        fallback_model_id=GEMINI_2_5_FLASH,
        description="Best performing multimodal model with advanced reasoning.",
    ),
    ModelDescriptor(
        id=GEMINI_2_5_FLASH,
        display_name="Gemini 2.5 Flash",
        generation=ModelGeneration.GEN_2_5,
        capabilities=ModelCapabilities(
            max_context_tokens=1_000_000,
            cost_per_million_input_tokens=0.10,
            cost_per_million_output_tokens=0.40,
            rate_limit_per_minute=120,
        ),
        fallback_model_id=GEMINI_2_5_FLASH_LITE,
        description="Best price-performance, low latency.",
    ),
    ModelDescriptor(
        id=GEMINI_2_5_FLASH_LITE,
        display_name="Gemini 2.5 Flash Lite",
        generation=ModelGeneration.GEN_2_5,
        capabilities=ModelCapabilities(
            max_context_tokens=1_000_000,
            cost_per_million_input_tokens=0.05,
            cost_per_million_output_tokens=0.20,
            rate_limit_per_minute=120,
        ),
        fallback_model_id=GEMINI_2_0_FLASH_EXP,
        description="Fastest and most cost-effective.",
    ),
    ModelDescriptor(
        id=GEMINI_2_0_FLASH_EXP,
        display_name="Gemini 2.0 Flash Exp",
        generation=ModelGeneration.GEN_2_0,
        capabilities=ModelCapabilities(
            max_context_tokens=8_192,
            cost_per_million_input_tokens=0.0,
            cost_per_million_output_tokens=0.0,
            rate_limit_per_minute=15,
        ),
        fallback_model_id=GEMINI_1_5_FLASH_8B,
    ),
    ModelDescriptor(
        id=GEMINI_1_5_PRO,
        display_name="Gemini 1.5 Pro",
        generation=ModelGeneration.GEN_1_5,
        capabilities=ModelCapabilities(
            max_context_tokens=8_192,
            cost_per_million_input_tokens=1.25,
            cost_per_million_output_tokens=5.00,
            rate_limit_per_minute=2,
        ),
        fallback_model_id=GEMINI_2_5_FLASH,
    ),
    ModelDescriptor(
        id=GEMINI_1_5_FLASH,
        display_name="Gemini 1.5 Flash",
        generation=ModelGeneration.GEN_1_5,
        capabilities=ModelCapabilities(
            max_context_tokens=8_192,
            cost_per_million_input_tokens=0.075,
            cost_per_million_output_tokens=0.30,
            rate_limit_per_minute=15,
        ),
        fallback_model_id=GEMINI_2_5_FLASH,
    ),
    ModelDescriptor(
        id=GEMINI_1_5_FLASH_8B,
        display_name="Gemini 1.5 Flash 8B",
        generation=ModelGeneration.GEN_1_5,
        capabilities=ModelCapabilities(
            max_context_tokens=8_192,
            cost_per_million_input_tokens=0.0375,
            cost_per_million_output_tokens=0.15,
            rate_limit_per_minute=15,
        ),
    ),
)


# Hand-authored chains for tier-defining models. The top tier skips straight
# to the current production models instead of walking single links.
OVERRIDE_CHAINS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        GEMINI_3_0_PRO: (GEMINI_3_0_PRO, GEMINI_2_5_FLASH, GEMINI_2_5_FLASH_LITE),
    }
)


# Names that older settings files saved, mapped to their current ids.
LEGACY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "gemini-3-pro": GEMINI_3_0_PRO,
        "gemini-3-flash": GEMINI_2_5_FLASH,
        "gemini-pro": GEMINI_2_5_FLASH,
        "gemini-flash": GEMINI_2_5_FLASH,
    }
)


__all__ = [
    "GEMINI_MODELS",
    "OVERRIDE_CHAINS",
    "LEGACY_ALIASES",
    "DEFAULT_MODEL_ID",
    "GEMINI_3_0_PRO",
    "GEMINI_2_5_FLASH",
    "GEMINI_2_5_FLASH_LITE",
    "GEMINI_2_0_FLASH_EXP",
    "GEMINI_1_5_PRO",
    "GEMINI_1_5_FLASH",
    "GEMINI_1_5_FLASH_8B",
]

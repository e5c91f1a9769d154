from __future__ import annotations

import pytest

from genai_failover.base.models import ModelCapabilities, ModelDescriptor, ModelGeneration
from genai_failover.registry import (
    GEMINI_MODELS,
    ModelNotFoundError,
    ModelRegistry,
    RegistryConfigError,
)


def _model(model_id: str, fallback: str | None = None, gen: ModelGeneration = ModelGeneration.GEN_2_5) -> ModelDescriptor:
    return ModelDescriptor(
        id=model_id,
        display_name=model_id.upper(),
        generation=gen,
        capabilities=ModelCapabilities(
            max_context_tokens=1000,
            cost_per_million_input_tokens=1.0,
            cost_per_million_output_tokens=2.0,
            rate_limit_per_minute=10,
        ),
        fallback_model_id=fallback,
    )


def test_catalog_ids_are_unique_and_complete(registry):
    ids = [m.id for m in registry.list_models()]
    assert len(ids) == len(set(ids)) == 7  # nosec B101
    assert registry.default_model_id == "gemini-2.5-flash"  # nosec B101
    assert ids == [m.id for m in GEMINI_MODELS]  # nosec B101


def test_lookup_known_and_unknown(registry):
    d = registry.lookup("gemini-2.5-flash-lite")
    assert d.capabilities.max_context_tokens == 1_000_000  # nosec B101
    assert d.fallback_model_id == "gemini-2.0-flash-exp"  # nosec B101
    with pytest.raises(ModelNotFoundError) as ei:
        registry.lookup("gpt-4o")
    assert ei.value.model_id == "gpt-4o"  # nosec B101
    assert isinstance(ei.value, KeyError)  # nosec B101


def test_estimate_cost_is_plain_arithmetic(registry):
    assert registry.estimate_cost("gemini-2.5-flash", 1_000_000, 1_000_000) == pytest.approx(0.50)  # nosec B101
    assert registry.estimate_cost("gemini-3.0-pro", 2_000, 500) == pytest.approx(0.0025 + 0.001875)  # nosec B101
    assert registry.estimate_cost("gemini-2.0-flash-exp", 10**9, 10**9) == 0.0  # nosec B101
    with pytest.raises(ModelNotFoundError):
        registry.estimate_cost("nope", 1, 1)


def test_generation_filters(registry):
    legacy = {m.id for m in registry.legacy_models()}
    modern = {m.id for m in registry.modern_models()}
    assert legacy == {"gemini-1.5-pro", "gemini-1.5-flash", "gemini-1.5-flash-8b"}  # nosec B101
    assert "gemini-2.0-flash-exp" in modern and not modern & legacy  # nosec B101
    assert registry.is_modern("gemini-3.0-pro")  # nosec B101
    assert not registry.is_modern("gemini-1.5-flash")  # nosec B101
    flash = registry.models_in_generations(ModelGeneration.GEN_2_5)
    assert [m.id for m in flash] == ["gemini-2.5-flash", "gemini-2.5-flash-lite"]  # nosec B101


def test_chain_follows_links(registry):
    assert registry.build_fallback_chain("gemini-2.5-flash") == (  # nosec B101
        "gemini-2.5-flash",
        "gemini-2.5-flash-lite",
        "gemini-2.0-flash-exp",
        "gemini-1.5-flash-8b",
    )
    assert registry.build_fallback_chain("gemini-1.5-flash-8b") == ("gemini-1.5-flash-8b",)  # nosec B101


def test_chain_uses_override_for_top_tier(registry):
    assert registry.build_fallback_chain("gemini-3.0-pro") == (  # nosec B101
        "gemini-3.0-pro",
        "gemini-2.5-flash",
        "gemini-2.5-flash-lite",
    )


def test_chain_terminates_on_cycle():
    reg = ModelRegistry([_model("a", "b"), _model("b", "c"), _model("c", "a")])
    chain = reg.build_fallback_chain("b")
    assert chain == ("b", "c", "a")  # nosec B101
    assert len(chain) == len(set(chain))  # nosec B101


def test_chain_self_loop_and_dangling_link():
    reg = ModelRegistry([_model("a", "a"), _model("b", "ghost")])
    assert reg.build_fallback_chain("a") == ("a",)  # nosec B101
    assert reg.build_fallback_chain("b") == ("b", "ghost")  # nosec B101


def test_chain_is_non_empty_for_every_model(registry):
    for m in registry.list_models():
        chain = registry.build_fallback_chain(m.id)
        assert chain[0] == m.id  # nosec B101
        assert len(chain) == len(set(chain))  # nosec B101


@pytest.mark.parametrize(
    "kwargs",
    [
        {"models": []},
        {"models": [_model("a"), _model("a")]},
        {"models": [_model("a")], "default_model_id": "b"},
        {"models": [_model("a")], "override_chains": {"a": ("a", "zzz")}},
        {"models": [_model("a")], "aliases": {"old": "zzz"}},
    ],
)
def test_malformed_catalog_rejected(kwargs):
    models = kwargs.pop("models")
    with pytest.raises(RegistryConfigError):
        ModelRegistry(models, **kwargs)


def test_unknown_configured_default_rejected():
    with pytest.raises(RegistryConfigError):
        ModelRegistry(default_model_id="gemini-9-ultra")


def test_descriptor_validation():
    with pytest.raises(ValueError):
        ModelCapabilities(
            max_context_tokens=0,
            cost_per_million_input_tokens=0.0,
            cost_per_million_output_tokens=0.0,
            rate_limit_per_minute=0,
        )


def test_descriptor_to_dict(registry):
    data = registry.lookup("gemini-3.0-pro").to_dict()
    assert data["id"] == "gemini-3.0-pro"  # nosec B101
    assert data["generation"] == "3.0"  # nosec B101
    assert data["fallback_model_id"] == "gemini-2.5-flash"  # nosec B101

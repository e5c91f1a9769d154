"""Model registry: lookups, fallback chains and preference resolution.

``ModelRegistry`` wraps an immutable model table and exposes pure functions
over it. It performs no I/O and holds no mutable state, so one instance is
safely shared by concurrent callers.

Preference resolution is an ordered rule list evaluated top to bottom; the
first matching rule decides. The last rule always matches, which keeps
``resolve_preferred_model`` total: stale or garbage settings values resolve to
the system default instead of failing a request.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..base.logging import get_logger, log_event
from ..base.models import ModelDescriptor, ModelGeneration
from .catalog import (
    DEFAULT_MODEL_ID,
    GEMINI_2_0_FLASH_EXP,
    GEMINI_2_5_FLASH,
    GEMINI_2_5_FLASH_LITE,
    GEMINI_MODELS,
    LEGACY_ALIASES,
    OVERRIDE_CHAINS,
)
from .registry_error import ModelNotFoundError, RegistryConfigError

_MODEL_PREFIX = "models/"
_MODERN_MIN_RANK = ModelGeneration.GEN_2_0.rank


@dataclass(frozen=True)
class GenerationMigration:
    """Maps any preference containing ``marker`` to a current model.

    ``lite_target`` is used instead of ``target`` when the preference names an
    economy ("lite") variant.
    """

    marker: str
    target: str
    lite_target: Optional[str] = None

    def resolve(self, key: str) -> str:
        if self.lite_target and "lite" in key:
            return self.lite_target
        return self.target


# Deprecated generations, checked in order.
GENERATION_MIGRATIONS: Tuple[GenerationMigration, ...] = (
    GenerationMigration(marker="1.5", target=GEMINI_2_5_FLASH, lite_target=GEMINI_2_5_FLASH_LITE),
    GenerationMigration(marker="2.0", target=GEMINI_2_0_FLASH_EXP),
)


@dataclass(frozen=True)
class PreferenceRule:
    """One step of preference resolution."""

    name: str
    matches: Callable[["ModelRegistry", str], bool]
    resolve: Callable[["ModelRegistry", str], str]


def _migration_for(registry: "ModelRegistry", key: str) -> Optional[GenerationMigration]:
    return next((m for m in registry.migrations if m.marker in key), None)


PREFERENCE_RULES: Tuple[PreferenceRule, ...] = (
    PreferenceRule("unset", lambda r, k: not k, lambda r, k: r.default_model_id),
    PreferenceRule("exact", lambda r, k: r.contains(k), lambda r, k: k),
    PreferenceRule("alias", lambda r, k: k in r.aliases, lambda r, k: r.aliases[k]),
    PreferenceRule(
        "migrate",
        lambda r, k: _migration_for(r, k) is not None,
        lambda r, k: _migration_for(r, k).resolve(k),  # type: ignore[union-attr]
    ),
    PreferenceRule("fallback", lambda r, k: True, lambda r, k: r.default_model_id),
)


def normalize_preference(value: Optional[str]) -> str:
    """Return the comparison key for a saved preference (trimmed, lower-cased)."""
    if not value:
        return ""
    key = str(value).strip().lower()
    if key.startswith(_MODEL_PREFIX):
        key = key[len(_MODEL_PREFIX) :]
    return key


class ModelRegistry:
    """Read-only view over a static model table.

    Parameters
    ----------
    models: Optional[Iterable[ModelDescriptor]]
        Model table. ``None`` uses the built-in Gemini catalog together with its
        override chains, legacy aliases and generation migrations; a custom
        table starts with none of those unless they are passed explicitly.
    default_model_id: Optional[str]
        System default model. Must be present in the table.
    override_chains, aliases, migrations:
        Optional policy tables (see ``registry.catalog``).
    logger: Optional[logging.Logger]
        Receives preference migration warnings.

    Raises
    ------
    RegistryConfigError
        If the table is empty, has duplicate ids, or any policy table names an
        id that is not in the table.
    """

    def __init__(
        self,
        models: Optional[Iterable[ModelDescriptor]] = None,
        *,
        default_model_id: Optional[str] = None,
        override_chains: Optional[Mapping[str, Sequence[str]]] = None,
        aliases: Optional[Mapping[str, str]] = None,
        migrations: Optional[Sequence[GenerationMigration]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or get_logger("registry")
        builtin = models is None
        table = tuple(GEMINI_MODELS if builtin else models)  # type: ignore[arg-type]
        if not table:
            raise RegistryConfigError("model table is empty")
        by_id: Dict[str, ModelDescriptor] = {}
        for descriptor in table:
            if descriptor.id in by_id:
                raise RegistryConfigError(f"duplicate model id: {descriptor.id!r}")
            by_id[descriptor.id] = descriptor
        self._models = table
        self._by_id: Mapping[str, ModelDescriptor] = MappingProxyType(by_id)

        if default_model_id is None:
            default_model_id = DEFAULT_MODEL_ID if builtin else table[0].id
        self._require_known(default_model_id, "default model")
        self._default_model_id = default_model_id

        chains = override_chains if override_chains is not None else (OVERRIDE_CHAINS if builtin else {})
        for start, chain in chains.items():
            for model_id in (start, *chain):
                self._require_known(model_id, f"override chain for {start!r}")
        self._override_chains: Mapping[str, Tuple[str, ...]] = MappingProxyType(
            {start: tuple(dict.fromkeys(chain)) for start, chain in chains.items()}
        )

        alias_table = aliases if aliases is not None else (LEGACY_ALIASES if builtin else {})
        for target in alias_table.values():
            self._require_known(target, "alias target")
        self._aliases: Mapping[str, str] = MappingProxyType(
            {normalize_preference(k): v for k, v in alias_table.items()}
        )

        migration_table = tuple(
            migrations if migrations is not None else (GENERATION_MIGRATIONS if builtin else ())
        )
        for migration in migration_table:
            self._require_known(migration.target, f"migration for {migration.marker!r}")
            if migration.lite_target:
                self._require_known(migration.lite_target, f"migration for {migration.marker!r}")
        self._migrations = migration_table

    def _require_known(self, model_id: str, what: str) -> None:
        if model_id not in self._by_id:
            raise RegistryConfigError(f"{what} names unknown model id {model_id!r}")

    # ---- read-only properties ----
    @property
    def default_model_id(self) -> str:
        return self._default_model_id

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    @property
    def migrations(self) -> Tuple[GenerationMigration, ...]:
        return self._migrations

    @property
    def override_chains(self) -> Mapping[str, Tuple[str, ...]]:
        return self._override_chains

    def contains(self, model_id: str) -> bool:
        return model_id in self._by_id

    # ---- lookups ----
    def lookup(self, model_id: str) -> ModelDescriptor:
        """Return the descriptor for ``model_id``.

        Raises
        ------
        ModelNotFoundError
            If the id is not in the table.
        """
        try:
            return self._by_id[model_id]
        except KeyError:
            raise ModelNotFoundError(model_id) from None

    def list_models(self) -> List[ModelDescriptor]:
        """Return all descriptors in catalog order."""
        return list(self._models)

    def models_in_generations(self, *generations: ModelGeneration) -> List[ModelDescriptor]:
        wanted = set(generations)
        return [m for m in self._models if m.generation in wanted]

    def modern_models(self) -> List[ModelDescriptor]:
        """Models of generation 2.0 and newer."""
        return [m for m in self._models if m.generation.rank >= _MODERN_MIN_RANK]

    def legacy_models(self) -> List[ModelDescriptor]:
        """Models older than generation 2.0."""
        return [m for m in self._models if m.generation.rank < _MODERN_MIN_RANK]

    def is_modern(self, model_id: str) -> bool:
        return self.lookup(model_id).generation.rank >= _MODERN_MIN_RANK

    # ---- policy ----
    def resolve_preferred_model(self, user_preference: Optional[str] = None) -> str:
        """Resolve a saved preference to a model id. Never raises.

        Migrated or unrecognised preferences are logged so stale settings can
        be found and cleaned up.
        """
        model_id, rule = self.explain_preference(user_preference)
        if rule in ("alias", "migrate"):
            log_event(
                self._logger,
                "registry.preference_migrated",
                preference=user_preference,
                resolved=model_id,
                rule=rule,
            )
        elif rule == "fallback":
            log_event(
                self._logger,
                "registry.preference_invalid",
                level=logging.WARNING,
                preference=user_preference,
                resolved=model_id,
            )
        return model_id

    def explain_preference(self, user_preference: Optional[str] = None) -> Tuple[str, str]:
        """Return ``(model_id, rule_name)`` for a preference.

        ``rule_name`` is one of ``unset``, ``exact``, ``alias``, ``migrate`` or
        ``fallback`` and is only informational (logs, CLI output).
        """
        key = normalize_preference(user_preference)
        for rule in PREFERENCE_RULES:
            if rule.matches(self, key):
                return rule.resolve(self, key), rule.name
        return self._default_model_id, "fallback"  # pragma: no cover - last rule always matches

    def build_fallback_chain(self, start_model_id: str) -> Tuple[str, ...]:
        """Return the ordered, duplicate-free list of models to try.

        Uses the override chain when ``start_model_id`` defines one; otherwise
        follows ``fallback_model_id`` links until a link is missing, points
        outside the table, or revisits a model already in the chain.
        """
        override = self._override_chains.get(start_model_id)
        if override:
            return override if override[0] == start_model_id else tuple(
                dict.fromkeys((start_model_id, *override))
            )
        chain: List[str] = [start_model_id]
        seen = {start_model_id}
        current = self._by_id.get(start_model_id)
        while current is not None and current.fallback_model_id:
            nxt = current.fallback_model_id
            if nxt in seen:
                break
            chain.append(nxt)
            seen.add(nxt)
            current = self._by_id.get(nxt)
        return tuple(chain)

    def estimate_cost(self, model_id: str, input_tokens: int, output_tokens: int) -> float:
        """Estimate request cost in USD from token counts (no rounding)."""
        caps = self.lookup(model_id).capabilities
        return (input_tokens / 1_000_000) * caps.cost_per_million_input_tokens + (
            output_tokens / 1_000_000
        ) * caps.cost_per_million_output_tokens


@lru_cache(maxsize=1)
def get_default_registry() -> ModelRegistry:
    """Return the shared registry over the built-in catalog."""
    return ModelRegistry()


__all__ = [
    "ModelRegistry",
    "GenerationMigration",
    "PreferenceRule",
    "PREFERENCE_RULES",
    "GENERATION_MIGRATIONS",
    "normalize_preference",
    "get_default_registry",
]

"""Model registry domain errors."""

from __future__ import annotations


class ModelRegistryError(Exception):
    """Base class for registry failures."""


class ModelNotFoundError(ModelRegistryError, KeyError):
    """Raised by ``ModelRegistry.lookup`` for an id absent from the catalog.

    This is the only registry operation allowed to fail at call time.
    """

    def __init__(self, model_id: str) -> None:
        super().__init__(model_id)
        self.model_id = model_id

    def __str__(self) -> str:
        return f"unknown model id: {self.model_id!r}"


class RegistryConfigError(ModelRegistryError, ValueError):
    """Raised at construction when the static catalog is malformed.

    Examples: an empty table, duplicate ids, a default model or override chain
    naming an id that is not in the table.
    """


__all__ = ["ModelRegistryError", "ModelNotFoundError", "RegistryConfigError"]

"""Per-call credential set.

``build_credential_set`` is called at the start of every generation so a key
rotated in the environment takes effect on the very next request. Nothing in
this module caches credentials.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Mapping, Optional, Tuple

from ..config.env import clean_credential, mask_credential, read_env_credentials

OVERRIDE_LABEL = "override"


@dataclass(frozen=True)
class CredentialSet:
    """Ordered, duplicate-free credentials to try, most preferred first.

    Attributes:
        values: Credential strings in attempt order.
        labels: Source label per credential (``override``, ``primary``, ``backup``).
    """

    values: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __bool__(self) -> bool:
        return bool(self.values)

    def label(self, index: int) -> str:
        return self.labels[index] if index < len(self.labels) else f"key{index}"

    def masked(self) -> List[str]:
        """Log-safe suffixes, one per credential."""
        return [mask_credential(v) for v in self.values]


def build_credential_set(
    override: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CredentialSet:
    """Assemble the credentials for one call.

    Order: caller override, primary env key, backup env key. Empty,
    whitespace-only and placeholder values are dropped; a value seen earlier
    in the order is not repeated.
    """
    candidates: List[Tuple[str, str]] = []
    if (cleaned := clean_credential(override)) is not None:
        candidates.append((OVERRIDE_LABEL, cleaned))
    candidates.extend(read_env_credentials(environ))

    values: List[str] = []
    labels: List[str] = []
    for label, value in candidates:
        if value in values:
            continue
        values.append(value)
        labels.append(label)
    return CredentialSet(values=tuple(values), labels=tuple(labels))


__all__ = ["CredentialSet", "build_credential_set", "OVERRIDE_LABEL"]

"""Failover decision table for the credential x model loop.

Auth and quota failures belong to the account, so the remaining models are
skipped for that credential. Every other failure is tied to the model that was
tried and moves on to the next one in the chain.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from ..base.errors import FailureKind


class FailoverAction(str, Enum):
    NEXT_MODEL = "next_model"
    NEXT_CREDENTIAL = "next_credential"


_ACTIONS: Mapping[FailureKind, FailoverAction] = MappingProxyType(
    {
        FailureKind.AUTH: FailoverAction.NEXT_CREDENTIAL,
        FailureKind.QUOTA: FailoverAction.NEXT_CREDENTIAL,
        FailureKind.OTHER: FailoverAction.NEXT_MODEL,
    }
)


def next_action(kind: FailureKind) -> FailoverAction:
    """Return what the loop does after a failure of ``kind``."""
    return _ACTIONS.get(kind, FailoverAction.NEXT_MODEL)


__all__ = ["FailoverAction", "next_action"]

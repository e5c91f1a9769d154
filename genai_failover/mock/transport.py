"""Deterministic scripted transport for offline runs and tests.

Purpose
-------
Implements the ``GenerationTransport`` contract without any network traffic.
Each call is answered from a script keyed by ``(credential, model)`` or by
``model`` alone, from an ordered ``sequence`` consumed one entry per call, or
from a default reply. Every call is recorded in ``calls`` so tests can assert
the exact attempt order.

An outcome is either reply text (returned as-is), an exception instance
(raised), or a callable receiving the :class:`TransportCall` and returning
text.

External dependencies
---------------------
Standard library only. The bundled fixture is read via ``importlib.resources``.
"""
from __future__ import annotations

import json
import threading
from collections import deque
from dataclasses import dataclass
from importlib import resources
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Sequence, Tuple, Union

_FIXTURE_PACKAGE = "genai_failover.mock.fixtures"
_FIXTURE_RESOURCE = "replies.json"


@dataclass(frozen=True)
class TransportCall:
    """One recorded attempt."""

    credential: str
    model: str
    prompt: str
    temperature: float
    response_schema: Optional[Any] = None
    timeout: Optional[float] = None


Outcome = Union[str, BaseException, Callable[[TransportCall], str]]
ScriptKey = Union[str, Tuple[str, str]]


class ScriptedProviderError(Exception):
    """Provider-style failure carrying an optional HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnscriptedCallError(RuntimeError):
    """Raised when a call matches no script entry and no default is set."""


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON reply catalog bundled with the mock transport."""
    data = resources.files(_FIXTURE_PACKAGE).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


def _outcome_from_fixture(entry: Any) -> Outcome:
    if isinstance(entry, Mapping) and "error" in entry:
        return ScriptedProviderError(str(entry["error"]), entry.get("status"))
    if isinstance(entry, str):
        return entry
    return json.dumps(entry)


class ScriptedTransport:
    """Transport replaying scripted outcomes.

    Lookup order per call: ``sequence`` (when non-empty), then
    ``script[(credential, model)]``, then ``script[model]``, then ``default``.
    """

    def __init__(
        self,
        script: Optional[Mapping[ScriptKey, Outcome]] = None,
        *,
        sequence: Optional[Sequence[Outcome]] = None,
        default: Optional[Outcome] = None,
        provider: str = "mock",
    ) -> None:
        self._script: Dict[ScriptKey, Outcome] = dict(script or {})
        self._sequence: Deque[Outcome] = deque(sequence or ())
        self._default = default
        self._provider = provider
        self._lock = threading.Lock()
        self.calls: List[TransportCall] = []

    @classmethod
    def from_fixture(cls, catalog: Optional[Mapping[str, Any]] = None) -> "ScriptedTransport":
        """Build a transport from the bundled (or a supplied) reply catalog."""
        data = catalog if catalog is not None else load_fixture_catalog()
        script = {model: _outcome_from_fixture(v) for model, v in (data.get("replies") or {}).items()}
        default = data.get("default_reply")
        return cls(
            script,
            default=_outcome_from_fixture(default) if default is not None else None,
            provider=str(data.get("provider", "mock")),
        )

    @property
    def provider_name(self) -> str:
        return self._provider

    @property
    def attempted_pairs(self) -> List[Tuple[str, str]]:
        """``(credential, model)`` of every recorded call, in order."""
        return [(c.credential, c.model) for c in self.calls]

    def _next_outcome(self, call: TransportCall) -> Outcome:
        with self._lock:
            self.calls.append(call)
            if self._sequence:
                return self._sequence.popleft()
        for key in ((call.credential, call.model), call.model):
            if key in self._script:
                return self._script[key]
        if self._default is not None:
            return self._default
        raise UnscriptedCallError(f"no scripted outcome for model {call.model!r}")

    def generate(
        self,
        *,
        credential: str,
        model: str,
        prompt: str,
        temperature: float,
        response_schema: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> str:
        call = TransportCall(credential, model, prompt, temperature, response_schema, timeout)
        outcome = self._next_outcome(call)
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(call)
        return outcome


__all__ = [
    "ScriptedTransport",
    "ScriptedProviderError",
    "TransportCall",
    "UnscriptedCallError",
    "load_fixture_catalog",
]

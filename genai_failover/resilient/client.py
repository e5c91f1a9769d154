"""ResilientGenerationClient: credential x model failover for JSON generation.

One call walks an ordered matrix of attempts: credentials in priority order
(outer loop) and, under each credential, the fallback chain of the resolved
preferred model (inner loop). The first attempt that returns parseable JSON
wins. Failures are classified once by ``classify_attempt_error`` and the
decision table in ``resilient.failover`` picks the next step:

* auth / quota   -> abandon this credential, restart the chain on the next one
* anything else  -> try the next model under the same credential

Each ``(credential, model)`` pair is attempted at most once. Cancellation (an
explicit ``cancel()`` or a passed deadline) is checked before every attempt via
``raise_if_cancelled`` and is terminal: a ``CancelledError`` from the token or
the transport ends the call with a ``cancelled`` failure. Callers only ever receive a ``GenerationSuccess`` or a
``GenerationFailure``; provider exceptions never escape ``generate``.
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from ..base.cancellation import CancellationToken, CancelledError
from ..base.constants import (
    ALL_ATTEMPTS_FAILED_ERROR,
    CANCELLED_ERROR,
    EMPTY_RESPONSE_ERROR,
    INVALID_JSON_ERROR,
    NO_CREDENTIALS_ERROR,
)
from ..base.errors import AttemptError, ErrorCode, GenerationError, classify_attempt_error
from ..base.interfaces import GenerationTransport
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import GenerationFailure, GenerationRequest, GenerationResult, GenerationSuccess
from ..base.timeouts import TimeoutConfig, attempt_timeout, get_timeout_config
from ..base.utils import parse_ai_response_json
from ..config.env import mask_credential
from ..registry import ModelRegistry, get_default_registry
from .credentials import CredentialSet, build_credential_set
from .failover import FailoverAction, next_action


def decode_response(text: Optional[str], model: str, response_model: Optional[Type[BaseModel]] = None) -> Any:
    """Turn raw provider text into a success payload.

    Raises
    ------
    GenerationError
        ``empty_response`` for blank text, ``validation`` when the text is not
        JSON or does not match ``response_model``.
    """
    if not text or not text.strip():
        raise GenerationError(code=ErrorCode.EMPTY_RESPONSE, message=EMPTY_RESPONSE_ERROR, model=model)
    try:
        data = parse_ai_response_json(text)
    except ValueError as e:
        raise GenerationError(
            code=ErrorCode.VALIDATION,
            message=f"{INVALID_JSON_ERROR}: {e}",
            model=model,
            raw=text[:500],
        ) from e
    if response_model is None:
        return data
    try:
        return response_model.model_validate(data)
    except ValidationError as e:
        raise GenerationError(
            code=ErrorCode.VALIDATION,
            message=f"response does not match {response_model.__name__}: {e.error_count()} error(s)",
            model=model,
            raw=text[:500],
        ) from e


class ResilientGenerationClient:
    """Structured-generation client with credential and model failover.

    Parameters
    ----------
    transport: GenerationTransport
        Provider boundary issuing one SDK call per attempt.
    registry: Optional[ModelRegistry]
        Model catalog and policy; defaults to the shared built-in registry.
    environ: Optional[Mapping[str, str]]
        Credential source read on every call; ``None`` reads ``os.environ``.
    timeouts: Optional[TimeoutConfig]
        Attempt/overall timeouts; ``None`` reads ``get_timeout_config()`` per call.
    logger: Optional[logging.Logger]
        Structured event sink; defaults to ``genai.resilient``.
    """

    def __init__(
        self,
        transport: GenerationTransport,
        registry: Optional[ModelRegistry] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        timeouts: Optional[TimeoutConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._transport = transport
        self._registry = registry or get_default_registry()
        self._environ = environ
        self._timeouts = timeouts
        self._logger = logger or get_logger("resilient")

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    @property
    def transport(self) -> GenerationTransport:
        return self._transport

    def generate(
        self,
        request: GenerationRequest,
        *,
        credential: Optional[str] = None,
        preferred_model_id: Optional[str] = None,
        response_model: Optional[Type[BaseModel]] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> GenerationResult:
        """Run the failover loop for one request.

        Parameters
        ----------
        request: GenerationRequest
            Prompt, temperature and optional response schema.
        credential: Optional[str]
            Caller-supplied key tried before the environment keys.
        preferred_model_id: Optional[str]
            Overrides ``request.preferred_model_id`` when given.
        response_model: Optional[Type[BaseModel]]
            Pydantic model the decoded JSON must validate against. A validation
            failure is an ordinary attempt failure and falls forward.
        cancellation: Optional[CancellationToken]
            Cooperative cancel/deadline; its remaining budget bounds every
            attempt's transport timeout.

        Returns
        -------
        GenerationResult
            ``GenerationSuccess`` from the first working pair, otherwise a
            ``GenerationFailure`` coded ``no_credentials``, ``cancelled`` or
            ``exhausted`` carrying the last attempt error.
        """
        timeouts = self._timeouts or get_timeout_config()
        token = cancellation
        if token is None and timeouts.overall_timeout_seconds:
            token = CancellationToken.with_timeout(timeouts.overall_timeout_seconds)

        ctx = LogContext(provider=self._transport.provider_name, request_id=uuid.uuid4().hex[:12])
        credentials = build_credential_set(credential, self._environ)
        if not credentials:
            normalized_log_event(
                self._logger,
                "generate.no_credentials",
                ctx,
                phase="finalize",
                error_code=ErrorCode.NO_CREDENTIALS.value,
                level=logging.ERROR,
            )
            return GenerationFailure(error_message=NO_CREDENTIALS_ERROR, code=ErrorCode.NO_CREDENTIALS)

        requested = preferred_model_id or request.preferred_model_id
        preferred = self._registry.resolve_preferred_model(requested)
        chain = self._registry.build_fallback_chain(preferred)
        normalized_log_event(
            self._logger,
            "generate.start",
            ctx.bind(model=preferred),
            phase="start",
            requested_model=requested,
            chain=list(chain),
            credentials=credentials.masked(),
            temperature=request.temperature,
            has_schema=request.response_schema is not None,
        )

        t0 = time.perf_counter()
        attempts = 0
        last_error: Optional[AttemptError] = None
        for cred_index, key in enumerate(credentials):
            for model in chain:
                attempt_ctx = ctx.bind(model=model, credential=mask_credential(key))
                try:
                    if token is not None:
                        token.raise_if_cancelled()
                    attempts += 1
                    text = self._transport.generate(
                        credential=key,
                        model=model,
                        prompt=request.prompt,
                        temperature=request.temperature,
                        response_schema=request.response_schema,
                        timeout=attempt_timeout(timeouts, token),
                    )
                    payload = decode_response(text, model, response_model)
                except CancelledError as exc:
                    return self._cancelled(str(exc), attempt_ctx, attempts, last_error)
                except Exception as exc:  # noqa: BLE001 - every attempt failure is classified
                    if token is not None and token.cancelled:
                        reason = token.reason or "cancelled"
                        return self._cancelled(reason, attempt_ctx, attempts, last_error)
                    last_error = classify_attempt_error(exc)
                    action = next_action(last_error.kind)
                    normalized_log_event(
                        self._logger,
                        "attempt.error",
                        attempt_ctx,
                        phase="attempt",
                        attempt=attempts,
                        error_code=last_error.code.value,
                        failure_kind=last_error.kind.value,
                        status=last_error.http_status,
                        error=last_error.message,
                        action=action.value,
                        level=logging.WARNING,
                    )
                    if action is FailoverAction.NEXT_CREDENTIAL:
                        normalized_log_event(
                            self._logger,
                            "attempt.credential_switch",
                            attempt_ctx,
                            phase="attempt",
                            attempt=attempts,
                            error_code=last_error.code.value,
                            from_credential=credentials.label(cred_index),
                        )
                        break
                    continue

                normalized_log_event(
                    self._logger,
                    "generate.success",
                    attempt_ctx,
                    phase="finalize",
                    attempt=attempts,
                    emitted=True,
                    credential_index=cred_index,
                    latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
                )
                return GenerationSuccess(
                    parsed_data=payload,
                    raw_text=text,
                    model_used=model,
                    credential_index=cred_index,
                    attempts=attempts,
                )

        return self._exhausted(ctx, attempts, last_error, credentials)

    # ---- internal helpers ----
    def _cancelled(
        self,
        reason: str,
        ctx: LogContext,
        attempts: int,
        last_error: Optional[AttemptError],
    ) -> GenerationFailure:
        normalized_log_event(
            self._logger,
            "generate.cancelled",
            ctx,
            phase="finalize",
            attempt=attempts,
            error_code=ErrorCode.CANCELLED.value,
            emitted=False,
            reason=reason,
            level=logging.WARNING,
        )
        return GenerationFailure(
            error_message=f"{CANCELLED_ERROR}: {reason}",
            raw_dump=last_error.dump() if last_error else "",
            code=ErrorCode.CANCELLED,
            attempts=attempts,
        )

    def _exhausted(
        self,
        ctx: LogContext,
        attempts: int,
        last_error: Optional[AttemptError],
        credentials: CredentialSet,
    ) -> GenerationFailure:
        normalized_log_event(
            self._logger,
            "generate.exhausted",
            ctx,
            phase="finalize",
            attempt=attempts,
            error_code=last_error.code.value if last_error else ErrorCode.EXHAUSTED.value,
            emitted=False,
            credentials=len(credentials),
            error=last_error.message if last_error else None,
            level=logging.ERROR,
        )
        return GenerationFailure(
            error_message=last_error.message if last_error else ALL_ATTEMPTS_FAILED_ERROR,
            raw_dump=last_error.dump() if last_error else "",
            code=ErrorCode.EXHAUSTED,
            attempts=attempts,
        )


__all__ = ["ResilientGenerationClient", "decode_response"]

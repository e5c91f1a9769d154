from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from genai_failover.base.cancellation import CancellationToken
from genai_failover.base.errors import ErrorCode
from genai_failover.base.models import GenerationRequest
from genai_failover.config import get_genai_config
from genai_failover.factory import build_default_client
from genai_failover.registry import ModelNotFoundError, ModelRegistry
from genai_failover.resilient import ResilientGenerationClient


class GenerateBody(BaseModel):
    """Body of ``POST /api/generate``.

    ``api_key`` is tried before the server's configured keys. ``model`` is a
    preference and goes through the same resolution as a saved setting.
    """

    prompt: str
    model: Optional[str] = None
    temperature: Optional[float] = None
    response_schema: Optional[Dict[str, Any]] = None
    api_key: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class ResolveBody(BaseModel):
    """Body of ``POST /api/models/resolve``."""

    preference: Optional[str] = None


# Terminal failure code -> HTTP status
FAILURE_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.NO_CREDENTIALS: 400,
    ErrorCode.CANCELLED: 499,
    ErrorCode.EXHAUSTED: 502,
}


@lru_cache(maxsize=1)
def _default_client() -> ResilientGenerationClient:
    return build_default_client()


def get_client_dep() -> ResilientGenerationClient:
    """FastAPI dependency returning the process-wide generation client."""
    return _default_client()


def get_config_dep() -> Dict[str, Any]:
    """FastAPI dependency returning the merged configuration."""
    return get_genai_config()


def _build_models_response(registry: ModelRegistry) -> Dict[str, Any]:
    return {
        "ok": True,
        "default_model": registry.default_model_id,
        "models": [m.to_dict() for m in registry.list_models()],
    }


def _build_chain_response(registry: ModelRegistry, model_id: str) -> Dict[str, Any]:
    """Return the fallback chain for a known model (404 otherwise)."""
    try:
        registry.lookup(model_id)
    except ModelNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"ok": True, "model": model_id, "chain": list(registry.build_fallback_chain(model_id))}


def _build_resolve_response(registry: ModelRegistry, body: ResolveBody) -> Dict[str, Any]:
    model_id, rule = registry.explain_preference(body.preference)
    return {"ok": True, "preference": body.preference, "model": model_id, "rule": rule}


def _handle_generate(
    body: GenerateBody,
    client: ResilientGenerationClient,
    config: Dict[str, Any],
) -> Any:
    """Validate the body, run the failover loop and map the outcome to HTTP."""
    temperature = body.temperature if body.temperature is not None else config.get("temperature")
    try:
        request = GenerationRequest(
            prompt=body.prompt,
            temperature=temperature,
            response_schema=body.response_schema,
        )
    except ValueError as e:
        return JSONResponse(
            status_code=400,
            content={"ok": False, "error": str(e), "code": ErrorCode.VALIDATION.value},
        )
    token = CancellationToken.with_timeout(body.timeout_seconds) if body.timeout_seconds else None
    result = client.generate(
        request,
        credential=body.api_key,
        preferred_model_id=body.model,
        cancellation=token,
    )
    if result.ok:
        return result.to_dict()
    return JSONResponse(status_code=FAILURE_STATUS.get(result.code, 502), content=result.to_dict())


__all__ = [
    "GenerateBody",
    "ResolveBody",
    "FAILURE_STATUS",
    "get_client_dep",
    "get_config_dep",
    "_build_models_response",
    "_build_chain_response",
    "_build_resolve_response",
    "_handle_generate",
]

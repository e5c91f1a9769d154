from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from genai_failover import __version__
from genai_failover.config.defaults import SERVICE_CORS_DEFAULT_ORIGINS
from genai_failover.resilient import ResilientGenerationClient

from .app_parts.app_core import (
    GenerateBody,
    ResolveBody,
    _build_chain_response,
    _build_models_response,
    _build_resolve_response,
    _handle_generate,
    get_client_dep,
    get_config_dep,
)

app = FastAPI(title="GenAI Failover Service", version=__version__)


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

cors_origins_env = os.getenv("GENAI_SERVICE_CORS_ORIGINS", SERVICE_CORS_DEFAULT_ORIGINS)
allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> Dict[str, Any]:
    """Return a static liveness payload."""
    return {"ok": True}


# ---------------------------------------------------------------------------
# Model catalog endpoints
# ---------------------------------------------------------------------------


@app.get("/api/models")
def get_models(client: ResilientGenerationClient = Depends(get_client_dep)) -> Dict[str, Any]:
    """List the model catalog and the system default model."""
    return _build_models_response(client.registry)


@app.get("/api/models/{model_id}/chain")
def get_chain(model_id: str, client: ResilientGenerationClient = Depends(get_client_dep)) -> Dict[str, Any]:
    """Return the fallback chain starting at ``model_id`` (404 when unknown)."""
    return _build_chain_response(client.registry, model_id)


@app.post("/api/models/resolve")
def resolve_model(body: ResolveBody, client: ResilientGenerationClient = Depends(get_client_dep)) -> Dict[str, Any]:
    """Resolve a saved preference the same way a generation call would."""
    return _build_resolve_response(client.registry, body)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@app.post("/api/generate")
def generate(
    body: GenerateBody,
    client: ResilientGenerationClient = Depends(get_client_dep),
    config: Dict[str, Any] = Depends(get_config_dep),
):
    """Run one structured generation with credential and model failover.

    Success returns ``{ok, data, raw, model_used, attempts}``. Failures return
    ``{ok: false, error, code, raw, attempts}`` with status 400 (no
    credentials), 499 (cancelled) or 502 (every attempt failed).
    """
    return _handle_generate(body, client, config)

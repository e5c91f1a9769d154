"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``genai-failover``. Each handler takes the parsed
``argparse.Namespace`` (plus optional injected collaborators for tests),
prints either a human-readable summary or JSON (``--json``) to stdout and
returns a process exit code. This module has no top-level side effects.

Exit Codes
----------
- ``0``: success
- ``1``: the operation ran but failed (generation exhausted, a key failed
  verification, no keys configured)
- ``2``: invalid input (unknown model id, unreadable schema file)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ...base.cancellation import CancellationToken
from ...base.errors import classify_attempt_error
from ...base.interfaces import GenerationTransport
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.models import GenerationRequest, ModelGeneration
from ...base.timeouts import get_timeout_config
from ...config import get_genai_config
from ...config.env import mask_credential, read_env_credentials
from ...factory import build_default_client, create_transport
from ...registry import ModelNotFoundError, ModelRegistry
from ...resilient import ResilientGenerationClient, decode_response


def _emit(args: argparse.Namespace, payload: Any, text: str) -> None:
    """Print ``payload`` as JSON when ``--json`` was given, else ``text``."""
    if getattr(args, "json", False):
        print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
    else:
        print(text)


def _error(args: argparse.Namespace, message: str, code: int = 2) -> int:
    if getattr(args, "json", False):
        print(json.dumps({"ok": False, "error": message}))
    else:
        print(f"error: {message}", file=sys.stderr)
    return code


def default_registry() -> ModelRegistry:
    """Registry honouring the configured default model."""
    return ModelRegistry(default_model_id=str(get_genai_config()["default_model"]))


def handle_models(args: argparse.Namespace, registry: Optional[ModelRegistry] = None) -> int:
    reg = registry or default_registry()
    if args.generation:
        try:
            wanted = [ModelGeneration(g) for g in args.generation]
        except ValueError as e:
            return _error(args, str(e))
        models = reg.models_in_generations(*wanted)
    elif args.modern:
        models = reg.modern_models()
    else:
        models = reg.list_models()
    lines = []
    for m in models:
        marker = "*" if m.id == reg.default_model_id else " "
        lines.append(
            f"{marker} {m.id:<24} {m.generation.value:<4} ctx={m.capabilities.max_context_tokens:<9} "
            f"fallback={m.fallback_model_id or '-'}"
        )
    _emit(
        args,
        {"ok": True, "default_model": reg.default_model_id, "models": [m.to_dict() for m in models]},
        "\n".join(lines),
    )
    return 0


def handle_resolve(args: argparse.Namespace, registry: Optional[ModelRegistry] = None) -> int:
    reg = registry or default_registry()
    model_id, rule = reg.explain_preference(args.preference)
    _emit(
        args,
        {"ok": True, "preference": args.preference, "model": model_id, "rule": rule},
        f"{args.preference!r} -> {model_id} ({rule})",
    )
    return 0


def handle_chain(args: argparse.Namespace, registry: Optional[ModelRegistry] = None) -> int:
    reg = registry or default_registry()
    try:
        reg.lookup(args.model)
    except ModelNotFoundError as e:
        return _error(args, str(e))
    chain = list(reg.build_fallback_chain(args.model))
    _emit(args, {"ok": True, "model": args.model, "chain": chain}, " -> ".join(chain))
    return 0


def handle_cost(args: argparse.Namespace, registry: Optional[ModelRegistry] = None) -> int:
    reg = registry or default_registry()
    try:
        cost = reg.estimate_cost(args.model, args.input_tokens, args.output_tokens)
    except ModelNotFoundError as e:
        return _error(args, str(e))
    _emit(
        args,
        {
            "ok": True,
            "model": args.model,
            "input_tokens": args.input_tokens,
            "output_tokens": args.output_tokens,
            "cost_usd": cost,
        },
        f"{args.model}: ${cost:.6f}",
    )
    return 0


def _load_schema(path: Optional[str]) -> Optional[Dict[str, Any]]:
    if not path:
        return None
    return json.loads(Path(path).read_text(encoding="utf-8"))


def handle_generate(args: argparse.Namespace, client: Optional[ResilientGenerationClient] = None) -> int:
    """Run one generation through the failover loop.

    Failure modes
    -------------
    - Unreadable or invalid ``--schema`` file: exit 2 before any call.
    - Empty prompt: exit 2.
    - Generation failure: the failure payload is printed and exit is 1.
    """
    try:
        schema = _load_schema(args.schema)
    except (OSError, ValueError) as e:
        return _error(args, f"cannot read schema: {e}")
    cfg = get_genai_config()
    temperature = args.temperature if args.temperature is not None else cfg["temperature"]
    try:
        request = GenerationRequest(prompt=args.prompt, temperature=temperature, response_schema=schema)
    except ValueError as e:
        return _error(args, str(e))
    client = client or build_default_client()
    token = CancellationToken.with_timeout(args.timeout) if args.timeout else None
    result = client.generate(
        request,
        credential=args.api_key,
        preferred_model_id=args.model,
        cancellation=token,
    )
    payload = result.to_dict()
    if result.ok:
        _emit(args, payload, json.dumps(payload["data"], indent=2, ensure_ascii=False, default=str))
        return 0
    _emit(args, payload, f"failed ({result.code.value}) after {result.attempts} attempt(s): {result.error_message}")
    return 1


def _probe_key(
    transport: GenerationTransport,
    key: str,
    models: List[str],
    prompt: str,
    timeout: float,
    logger,
    ctx: LogContext,
) -> Dict[str, Any]:
    """Try ``models`` in order with one key, stopping at the first success."""
    errors: List[Dict[str, Any]] = []
    for model in models:
        try:
            text = transport.generate(
                credential=key, model=model, prompt=prompt, temperature=0.0, timeout=timeout
            )
            decode_response(text, model)
        except Exception as exc:  # noqa: BLE001 - a probe reports every failure
            err = classify_attempt_error(exc)
            errors.append({"model": model, "kind": err.kind.value, "code": err.code.value, "error": err.message})
            normalized_log_event(
                logger,
                "verify.error",
                ctx.bind(model=model),
                phase="attempt",
                attempt=len(errors),
                error_code=err.code.value,
                failure_kind=err.kind.value,
            )
            continue
        return {"ok": True, "model": model, "errors": errors}
    return {"ok": False, "model": None, "errors": errors}


def handle_verify_keys(
    args: argparse.Namespace,
    transport: Optional[GenerationTransport] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Probe each configured credential separately.

    Unlike ``generate`` there is no failover across keys: each key is tried
    against ``--models`` in order until one answers with valid JSON, so a dead
    backup key cannot hide behind a working primary.
    """
    keys = read_env_credentials(environ)
    if not keys:
        return _error(args, "No API keys configured.", code=1)
    transport = transport or create_transport(environ=environ)
    logger = get_logger("cli.verify")
    timeout = get_timeout_config().attempt_timeout_seconds
    results = []
    for label, key in keys:
        ctx = LogContext(provider=transport.provider_name, credential=mask_credential(key))
        outcome = _probe_key(transport, key, list(args.models), args.prompt, timeout, logger, ctx)
        results.append({"key": label, "masked": mask_credential(key), **outcome})
    all_ok = all(r["ok"] for r in results)
    lines = []
    for r in results:
        status = f"OK via {r['model']}" if r["ok"] else "FAILED"
        lines.append(f"{r['key']:<8} {r['masked']:<8} {status}")
        lines.extend(f"    {e['model']}: [{e['kind']}] {e['error']}" for e in r["errors"])
    _emit(args, {"ok": all_ok, "keys": results}, "\n".join(lines))
    return 0 if all_ok else 1


def handle_serve(_args: argparse.Namespace) -> int:
    from ..dev_server import main as serve_main

    serve_main()
    return 0


__all__ = [
    "default_registry",
    "handle_models",
    "handle_resolve",
    "handle_chain",
    "handle_cost",
    "handle_generate",
    "handle_verify_keys",
    "handle_serve",
]

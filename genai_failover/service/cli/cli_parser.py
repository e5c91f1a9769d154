"""CLI parser construction for genai-failover.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...config.defaults import CLI_VERIFY_DEFAULT_MODELS, CLI_VERIFY_PROMPT


def _positive_float(v: str) -> float:
    val = float(v)
    if val <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return val


def _non_negative_int(v: str) -> int:
    val = int(v)
    if val < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return val


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``models``, ``resolve``, ``chain``, ``cost``, ``generate``,
        ``verify-keys`` and ``serve`` subcommands. Every subcommand accepts
        ``--json``.
    """
    p = argparse.ArgumentParser(
        prog="genai-failover", description="Gemini structured generation with credential/model failover"
    )
    p.add_argument("--log-level", default=None, help="Override GENAI_LOG_LEVEL for this run")
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this file (rotated)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_models = sub.add_parser("models", help="List the model catalog")
    p_models.add_argument("--generation", action="append", default=None, help="Filter by generation (repeatable)")
    p_models.add_argument("--modern", action="store_true", help="Only generation 2.0 and newer")
    p_models.add_argument("--json", action="store_true")

    p_resolve = sub.add_parser("resolve", help="Resolve a saved model preference")
    p_resolve.add_argument("preference", nargs="?", default=None)
    p_resolve.add_argument("--json", action="store_true")

    p_chain = sub.add_parser("chain", help="Show the fallback chain for a model")
    p_chain.add_argument("model")
    p_chain.add_argument("--json", action="store_true")

    p_cost = sub.add_parser("cost", help="Estimate request cost in USD")
    p_cost.add_argument("model")
    p_cost.add_argument("--input", dest="input_tokens", type=_non_negative_int, required=True)
    p_cost.add_argument("--output", dest="output_tokens", type=_non_negative_int, required=True)
    p_cost.add_argument("--json", action="store_true")

    p_gen = sub.add_parser("generate", help="Run one structured generation")
    p_gen.add_argument("--prompt", required=True)
    p_gen.add_argument("--model", default=None, help="Preferred model (resolved like a saved setting)")
    p_gen.add_argument("--api-key", default=None, help="Key tried before the environment keys")
    p_gen.add_argument("--temperature", type=float, default=None)
    p_gen.add_argument("--schema", default=None, help="Path to a JSON response schema")
    p_gen.add_argument("--timeout", type=_positive_float, default=None, help="Overall deadline in seconds")
    p_gen.add_argument("--json", action="store_true")

    p_verify = sub.add_parser("verify-keys", help="Probe each configured key separately")
    p_verify.add_argument("--models", nargs="+", default=list(CLI_VERIFY_DEFAULT_MODELS))
    p_verify.add_argument("--prompt", default=CLI_VERIFY_PROMPT)
    p_verify.add_argument("--json", action="store_true")

    sub.add_parser("serve", help="Start the HTTP service (uvicorn)")

    return p

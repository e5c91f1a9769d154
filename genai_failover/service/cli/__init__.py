"""genai-failover CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no generation logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import (
    handle_chain,
    handle_cost,
    handle_generate,
    handle_models,
    handle_resolve,
    handle_serve,
    handle_verify_keys,
)
from .cli_parser import build_parser

_HANDLERS = {
    "models": handle_models,
    "resolve": handle_resolve,
    "chain": handle_chain,
    "cost": handle_cost,
    "generate": handle_generate,
    "verify-keys": handle_verify_keys,
    "serve": handle_serve,
}


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    return _HANDLERS[args.cmd](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""genai_failover.config.defaults
=============================

Central place for small, stable default values used across the package and
the thin service/CLI layer. Every value can be overridden via environment
variables or the external config file (see ``genai_failover.config``).

This module imports nothing from the rest of the package to avoid cycles.
Only plain constants should live here.
"""

from __future__ import annotations

# ---- Generation defaults ----
# System default model when the caller expresses no (valid) preference.
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
# Sampling temperature applied when a request does not set one.
GENERATION_DEFAULT_TEMPERATURE = 0.7
# Upper bound for a single provider call (seconds).
ATTEMPT_DEFAULT_TIMEOUT_SECONDS = 60.0


# ---- Service / HTTP layer ----
# Comma-separated list of allowed origins for the dev server.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8787


# ---- CLI Defaults ----
# Prompt used by ``verify-keys`` to probe a credential.
CLI_VERIFY_PROMPT = 'Reply with the JSON object {"ok": true}.'
# Models probed per credential by ``verify-keys`` when none are given.
CLI_VERIFY_DEFAULT_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-flash-lite",
    "gemini-3.0-pro",
]


__all__ = [
    "GEMINI_DEFAULT_MODEL",
    "GENERATION_DEFAULT_TEMPERATURE",
    "ATTEMPT_DEFAULT_TIMEOUT_SECONDS",
    "SERVICE_CORS_DEFAULT_ORIGINS",
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
    "CLI_VERIFY_PROMPT",
    "CLI_VERIFY_DEFAULT_MODELS",
]

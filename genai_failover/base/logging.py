"""Structured logging utilities for the generation layer.

All loggers hang off a shared ``genai`` base logger that owns one stderr
handler (JSON by default) and, optionally, a rotating file handler added by
``configure_logger``. Events are emitted as one JSON object per line through
``log_event``; ``normalized_log_event`` guarantees the canonical keys
``structured``, ``phase``, ``attempt``, ``error_code`` and ``emitted`` so
downstream filters work across every event type.

``GENAI_LOG_LEVEL`` (default ``INFO``) sets the level whenever it is present;
an explicit ``configure_logger(level=...)`` wins until the variable changes.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "genai"
LOG_LEVEL_ENV = "GENAI_LOG_LEVEL"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Handlers installed here carry a role tag; untagged handlers belong to the host
# application and are never touched.
_ROLE_ATTR = "_genai_role"
_CONSOLE = "console"
_FILE = "file"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name (case-insensitive) to its constant, else ``default``."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _role(handler: logging.Handler) -> Optional[str]:
    return getattr(handler, _ROLE_ATTR, None)


def _tagged(role: str, handler: logging.Handler, json_mode: bool, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT))
    setattr(handler, _ROLE_ATTR, role)
    return handler


def _stream_open(handler: logging.Handler) -> bool:
    stream = getattr(handler, "stream", None)
    return stream is not None and not getattr(stream, "closed", False)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared ``genai`` logger with a live console handler."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    first_use = not any(_role(h) for h in logger.handlers)
    env_level = os.getenv(LOG_LEVEL_ENV)
    if first_use or env_level:
        logger.setLevel(_parse_level(env_level, default=level))
    logger.propagate = False

    for handler in [h for h in logger.handlers if _role(h) == _CONSOLE]:
        if _stream_open(handler):
            handler.setLevel(logger.level)
            continue
        # pytest output capture closes streams between tests
        logger.removeHandler(handler)
        handler.close()
    if not any(_role(h) == _CONSOLE for h in logger.handlers):
        logger.addHandler(_tagged(_CONSOLE, logging.StreamHandler(sys.stderr), json_mode, logger.level))
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``genai`` hierarchy.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so configuration changes apply everywhere at once.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared ``genai`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level (numeric or name). ``None`` keeps the current level.
    file_path: Optional[str]
        Attach (or keep) a rotating file handler writing to this path. ``None``
        removes a file handler installed by an earlier call.
    json_mode: bool
        Use the JSON formatter for a newly attached file handler.

    Returns
    -------
    logging.Logger
        The base logger.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)
    if level is not None:
        numeric = level if isinstance(level, int) else _parse_level(level, default=logger.level)
        logger.setLevel(numeric)
        for handler in logger.handlers:
            if _role(handler):
                handler.setLevel(numeric)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in [h for h in logger.handlers if _role(h) == _FILE]:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            return logger
        logger.removeHandler(handler)
        handler.close()
    if target is not None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        file_handler = RotatingFileHandler(
            target, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUP_COUNT, encoding="utf-8"
        )
        logger.addHandler(_tagged(_FILE, file_handler, json_mode, logger.level))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON line: name, context fields, then ``fields``.

    ``None`` values are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


# ---------------------- Normalization Layer ---------------------------------
REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
)


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` with the canonical keys present.

    ``error_code`` is the one canonical key omitted when ``None``. Extra fields
    never replace a canonical value that is set, and ``None`` extras are dropped.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
]

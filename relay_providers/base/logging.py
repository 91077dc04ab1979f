"""Structured logging for the streaming layer.

All modules obtain loggers through :func:`get_logger`, which hangs them under
one shared ``relay`` logger writing JSON lines to stderr. Events are emitted
with :func:`log_event` (free-form) or :func:`normalized_log_event`, which
guarantees the keys ``structured``, ``phase``, ``attempt``, ``emitted`` and
``tokens`` are present so lines from different backends aggregate cleanly.

The level is taken from ``RELAY_LOG_LEVEL`` (default ``INFO``).
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Mapping

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "relay"
LEVEL_ENV = "RELAY_LOG_LEVEL"

_READY_FLAG = "_relay_ready"
_OWNED_FLAG = "_relay_owned"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Turn a level name such as ``debug`` or ``WARN`` into its number."""
    if not value:
        return default
    name = value.strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def _stderr_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT))
    setattr(handler, _OWNED_FLAG, True)
    return handler


def _stream_is_dead(handler: logging.Handler) -> bool:
    stream = getattr(handler, "stream", None)
    return stream is None or bool(getattr(stream, "closed", False))


def _refresh(logger: logging.Logger, json_mode: bool, level: int) -> None:
    """Re-apply the level and replace owned handlers whose stream was closed."""
    logger.setLevel(level)
    handlers = []
    for handler in logger.handlers:
        if not getattr(handler, _OWNED_FLAG, False):
            handlers.append(handler)
        elif _stream_is_dead(handler):
            # pytest swaps and closes stderr between tests
            handlers.append(_stderr_handler(json_mode, level))
        else:
            handler.setLevel(level)
            handlers.append(handler)
    logger.handlers[:] = handlers


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared ``relay`` logger, configuring it on first use."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _parse_level(os.getenv(LEVEL_ENV), default=level)
    if getattr(logger, _READY_FLAG, False):
        _refresh(logger, json_mode, wanted)
        return logger
    logger.setLevel(wanted)
    logger.handlers[:] = [_stderr_handler(json_mode, wanted)]
    # Propagate so host applications (and caplog) still see the records.
    logger.propagate = True
    setattr(logger, _READY_FLAG, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the configured ``relay`` logger.

    Names outside the ``relay.`` namespace are prefixed so every package
    logger shares the base handler.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    qualified = name if name.startswith(BASE_LOGGER_NAME + ".") else f"{BASE_LOGGER_NAME}.{name}"
    child = logging.getLogger(qualified)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON message.

    ``ctx`` fields are merged first, then ``fields``. Keys whose value is
    ``None`` are dropped unless ``keep_none`` is set. Nothing is serialized
    when ``level`` is disabled for ``logger``.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    payload.update((k, v) for k, v in fields.items() if keep_none or v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "emitted", "tokens")


def _coerce_tokens(tokens: Any) -> Any:
    """Turn token usage (mapping, DTO with ``to_dict``, pairs) into a dict."""
    if tokens is None or isinstance(tokens, dict):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    as_dict = getattr(tokens, "to_dict", None)
    if callable(as_dict):
        return as_dict()
    try:
        return dict(tokens)
    except (TypeError, ValueError):
        return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: int | None = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    ``error_code`` is omitted when ``None``. Extra fields never overwrite a
    normalized key that already has a value.
    """
    fields: Dict[str, Any] = dict(
        structured=True,
        phase=phase,
        attempt=attempt,
        emitted=emitted,
        tokens=_coerce_tokens(tokens),
    )
    if error_code is not None:
        fields["error_code"] = error_code
    fields.update(
        (k, v)
        for k, v in extra_fields.items()
        if v is not None and fields.get(k) is None
    )
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "REQUIRED_NORMALIZED_KEYS",
    "get_logger",
    "log_event",
    "normalized_log_event",
]

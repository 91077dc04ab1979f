"""Eager configuration checks run by ``create_message``.

Failures are logged as ``config.error`` and raised as
:class:`ConfigurationError` before any transport call is attempted.
"""

from __future__ import annotations

import logging
from typing import Optional

from .dto import HandlerOptions
from .errors import ConfigurationError, ErrorCode
from .logging import LogContext, log_event
from .urls import validate_base_url


def validate_handler_options(
    options: HandlerOptions,
    provider: str,
    model: Optional[str],
    *,
    logger: logging.Logger,
) -> None:
    """Require an API key and a well-formed base URL."""
    try:
        if not (options.api_key or "").strip():
            raise ConfigurationError(
                code=ErrorCode.CONFIGURATION,
                message="missing API key",
                provider=provider,
                model=model,
            )
        validate_base_url(options.base_url, provider)
    except ConfigurationError as e:
        log_event(
            logger,
            "config.error",
            LogContext(provider=provider, model=model),
            level=logging.WARNING,
            error=e.message,
            error_code=e.code.value,
        )
        raise


__all__ = ["validate_handler_options"]

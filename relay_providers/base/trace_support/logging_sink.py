"""Trace sink that writes each record as a structured log line."""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import get_logger, log_event
from .trace_record import TraceRecord


class LoggingTraceSink:
    """Emit ``trace.record`` events on the ``relay.trace`` logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        self._logger = logger or get_logger("relay.trace")
        self._level = level

    def submit(self, record: TraceRecord) -> None:
        log_event(self._logger, "trace.record", level=self._level, **record.to_dict())


__all__ = ["LoggingTraceSink"]

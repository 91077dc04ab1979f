"""Trace sink exporting records as OpenTelemetry spans.

Only ``opentelemetry-api`` is required. Without an SDK and exporter
configured by the host application the global tracer provider is a no-op,
which keeps this sink safe to enable unconditionally.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..errors import ObservabilityError
from .trace_record import TraceRecord, to_jsonable


def _ns(seconds: Optional[float]) -> Optional[int]:
    return int(seconds * 1_000_000_000) if seconds is not None else None


class OpenTelemetryTraceSink:
    """Emit one span per :class:`TraceRecord`."""

    def __init__(self, tracer: Any = None, service_name: str = "relay") -> None:
        self._tracer = tracer or trace.get_tracer(service_name)

    def submit(self, record: TraceRecord) -> None:
        try:
            span = self._tracer.start_span(record.name, start_time=_ns(record.start_time))
            try:
                span.set_attribute("relay.run_id", record.run_id)
                span.set_attribute("relay.run_type", record.run_type)
                span.set_attribute("relay.inputs", json.dumps(to_jsonable(record.inputs), ensure_ascii=False))
                if record.outputs is not None:
                    span.set_attribute("relay.outputs", json.dumps(to_jsonable(record.outputs), ensure_ascii=False))
                if record.error:
                    span.set_status(Status(StatusCode.ERROR, record.error))
                else:
                    span.set_status(Status(StatusCode.OK))
            finally:
                span.end(end_time=_ns(record.end_time))
        except Exception as e:
            raise ObservabilityError(f"span export failed: {e}") from e


__all__ = ["OpenTelemetryTraceSink"]

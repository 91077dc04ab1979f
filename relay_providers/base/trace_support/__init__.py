"""Trace records and sinks used by ``base.tracing``."""

from .trace_record import TraceRecord, to_jsonable
from .logging_sink import LoggingTraceSink
from .otel_sink import OpenTelemetryTraceSink

__all__ = ["TraceRecord", "to_jsonable", "LoggingTraceSink", "OpenTelemetryTraceSink"]

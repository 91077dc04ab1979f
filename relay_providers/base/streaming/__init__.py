"""Streaming package: canonical events, usage accumulation, transport boundary."""

from .events import CanonicalEvent, StreamSummary, TextEvent, UsageEvent, accumulate_events
from .usage import UsageAccumulator, calculate_cost, coerce_count
from .transport import iterate_transport, open_stream, to_transport_error
from .runner import run_stream

__all__ = [
    "CanonicalEvent",
    "StreamSummary",
    "TextEvent",
    "UsageEvent",
    "accumulate_events",
    "UsageAccumulator",
    "calculate_cost",
    "coerce_count",
    "iterate_transport",
    "open_stream",
    "to_transport_error",
    "run_stream",
]

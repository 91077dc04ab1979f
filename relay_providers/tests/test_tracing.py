"""Instrumentation wrapper: transparent forwarding and best-effort reporting."""
from __future__ import annotations

import gc
import logging

import pytest

from relay_providers.base.errors import ErrorCode, ObservabilityError, TransportError
from relay_providers.base.streaming import TextEvent, UsageEvent
from relay_providers.base.trace_support import LoggingTraceSink, OpenTelemetryTraceSink, TraceRecord
from relay_providers.base.tracing import CANCELLED, resolve_trace_sink, traceable, wrap
from relay_providers.tests.utils import BrokenSink, RecordingSink, logged_events

EVENTS = [UsageEvent(5, 0), TextEvent("a"), TextEvent("b"), UsageEvent(5, 2)]


class _ClosingIterator:
    def __init__(self, items):
        self._it = iter(items)
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._it)

    def close(self):
        self.closed = True


def _produce(system_prompt, turns):
    yield from EVENTS


def _fail_after_two(system_prompt, turns):
    yield TextEvent("a")
    yield TextEvent("b")
    raise TransportError(code=ErrorCode.DISCONNECTED, message="dropped", provider="test")


def test_forwards_every_event_and_records_summary():
    sink = RecordingSink()
    traced = wrap("Test Chat", "llm", _produce, sink)

    assert list(traced("sys", ["t"])) == EVENTS
    assert len(sink.records) == 1
    record = sink.records[0]
    assert record.name == "Test Chat"
    assert record.run_type == "llm"
    assert record.inputs == {"system_prompt": "sys", "turns": ["t"]}
    assert record.outputs == {
        "content": "ab",
        "usage": {"input_tokens": 5, "output_tokens": 2, "cache_write_tokens": None, "cache_read_tokens": None},
    }
    assert record.error is None
    assert record.end_time is not None


def test_record_starts_before_first_pull():
    sink = RecordingSink()
    traced = wrap("Test Chat", "llm", _produce, sink, inputs=lambda s, t: {"prompt": s})

    gen = traced("sys", [])
    assert sink.records == []
    next(gen)
    gen.close()
    assert sink.records[0].inputs == {"prompt": "sys"}


def test_error_is_recorded_and_reraised_unchanged():
    sink = RecordingSink()
    traced = wrap("Test Chat", "llm", _fail_after_two, sink)
    received = []

    with pytest.raises(TransportError) as info:
        for ev in traced("sys", []):
            received.append(ev)

    assert info.value.code is ErrorCode.DISCONNECTED
    assert received == [TextEvent("a"), TextEvent("b")]
    assert sink.records[0].error.startswith("TransportError")
    assert sink.records[0].outputs["content"] == "ab"


def test_eager_failure_is_recorded_and_reraised():
    sink = RecordingSink()

    def boom(x):
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        wrap("Test Chat", "llm", boom, sink)(1)
    assert sink.records[0].error == "ValueError: bad input"


def test_cancellation_submits_partial_record_and_closes_inner():
    sink = RecordingSink()
    inner = _ClosingIterator(EVENTS)
    traced = wrap("Test Chat", "llm", lambda: inner, sink)

    gen = traced()
    assert next(gen) == EVENTS[0]
    assert next(gen) == EVENTS[1]
    gen.close()

    assert inner.closed is True
    assert len(sink.records) == 1
    assert sink.records[0].error == CANCELLED
    assert sink.records[0].outputs["content"] == "a"


def test_closing_before_first_pull_submits_cancelled_record():
    sink = RecordingSink()
    inner = _ClosingIterator(EVENTS)
    traced = wrap("Test Chat", "llm", lambda: inner, sink)

    gen = traced()
    gen.close()
    gen.close()

    assert inner.closed is True
    assert len(sink.records) == 1
    assert sink.records[0].error == CANCELLED
    assert sink.records[0].outputs == {"content": "", "usage": None}
    assert sink.records[0].end_time is not None


def test_dropping_an_unstarted_stream_submits_cancelled_record():
    sink = RecordingSink()
    traced = wrap("Test Chat", "llm", _produce, sink)

    gen = traced("sys", [])
    del gen
    gc.collect()

    assert [r.error for r in sink.records] == [CANCELLED]


def test_close_after_exhaustion_submits_nothing_more():
    sink = RecordingSink()
    gen = wrap("Test Chat", "llm", _produce, sink)("sys", [])

    assert list(gen) == EVENTS
    gen.close()

    assert len(sink.records) == 1
    assert sink.records[0].error is None


def test_broken_sink_never_changes_output(caplog):
    caplog.set_level(logging.WARNING, logger="relay")
    broken = BrokenSink()

    with_broken = list(wrap("Test Chat", "llm", _produce, broken)("s", []))
    with_none = list(wrap("Test Chat", "llm", _produce, None)("s", []))
    with_recording = list(wrap("Test Chat", "llm", _produce, RecordingSink())("s", []))

    assert with_broken == with_none == with_recording == EVENTS
    assert broken.attempts == 1
    errors = [e for e in logged_events(caplog.records) if e["event"] == "trace.error"]
    assert errors and errors[0]["error"] == "sink offline"


def test_broken_sink_does_not_mask_primary_error():
    with pytest.raises(TransportError):
        list(wrap("Test Chat", "llm", _fail_after_two, BrokenSink())("s", []))


def test_none_sink_returns_function_itself():
    assert wrap("Test Chat", "llm", _produce, None) is _produce


def test_traceable_decorator():
    sink = RecordingSink()

    @traceable("Decorated", sink=sink)
    def stream(prompt):
        yield TextEvent(prompt)

    assert list(stream("x")) == [TextEvent("x")]
    assert stream.__name__ == "stream"
    assert sink.records[0].name == "Decorated"


def test_resolve_trace_sink(monkeypatch, caplog):
    assert isinstance(resolve_trace_sink(), LoggingTraceSink)
    assert resolve_trace_sink("none") is None
    assert isinstance(resolve_trace_sink("otel"), OpenTelemetryTraceSink)
    monkeypatch.setenv("RELAY_TRACE_SINK", "off")
    assert resolve_trace_sink() is None

    caplog.set_level(logging.WARNING, logger="relay")
    assert resolve_trace_sink("carrier-pigeon") is None
    assert any(e["event"] == "trace.error" for e in logged_events(caplog.records))


def test_logging_sink_emits_trace_record(debug_logs):
    record = TraceRecord(name="Anthropic Chat", run_type="llm", inputs={"model": "m"})
    record.finish({"content": "hi", "usage": None})

    LoggingTraceSink().submit(record)

    emitted = [e for e in logged_events(debug_logs.records) if e["event"] == "trace.record"]
    assert emitted[0]["name"] == "Anthropic Chat"
    assert emitted[0]["outputs"] == {"content": "hi", "usage": None}
    assert emitted[0]["duration_ms"] >= 0


def test_otel_sink_wraps_tracer_failures():
    class _Tracer:
        def start_span(self, *args, **kwargs):
            raise RuntimeError("exporter down")

    sink = OpenTelemetryTraceSink(tracer=_Tracer())
    with pytest.raises(ObservabilityError):
        sink.submit(TraceRecord(name="n", run_type="llm", inputs={}))


def test_otel_sink_sets_span_attributes():
    spans = []

    class _Span:
        def __init__(self):
            self.attributes = {}
            self.status = None
            self.ended = False

        def set_attribute(self, key, value):
            self.attributes[key] = value

        def set_status(self, status):
            self.status = status

        def end(self, end_time=None):
            self.ended = True

    class _Tracer:
        def start_span(self, name, start_time=None):
            span = _Span()
            spans.append((name, span))
            return span

    record = TraceRecord(name="OpenAI Chat", run_type="llm", inputs={"model": "gpt"})
    record.finish({"content": "x", "usage": None}, error=CANCELLED)
    OpenTelemetryTraceSink(tracer=_Tracer()).submit(record)

    name, span = spans[0]
    assert name == "OpenAI Chat"
    assert span.ended is True
    assert span.attributes["relay.run_type"] == "llm"
    assert span.status.description == CANCELLED

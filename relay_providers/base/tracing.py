"""Instrumentation wrapper for streaming calls.

``wrap`` turns a function returning an event iterator into one that also
reports a :class:`TraceRecord` to a sink:

* inputs are bound and the record started when the function is called,
  before the first element is pulled;
* every element is forwarded unchanged and in order;
* on completion the record gets the concatenated text and final usage;
* on failure the record gets the error and the original exception is
  re-raised untouched;
* if the caller stops iterating early, a partial record marked
  ``cancelled`` is submitted and the wrapped iterator is closed. This also
  holds for a stream closed or garbage collected before its first element.

Sink failures are logged as ``trace.error`` and dropped. A ``None`` sink
makes ``wrap`` return the function itself.

Usage::

    @traceable("Anthropic Chat", sink=resolve_trace_sink())
    def stream(system_prompt, turns):
        ...
"""
from __future__ import annotations

import functools
import inspect
import logging
import os
from typing import Any, Callable, Dict, Iterator, Optional, Protocol, runtime_checkable

from ..config.defaults import DEFAULT_TRACE_SINK
from .logging import get_logger, log_event
from .streaming import TextEvent, UsageEvent
from .trace_support import LoggingTraceSink, OpenTelemetryTraceSink, TraceRecord

_logger = get_logger("relay.trace")

CANCELLED = "cancelled"


@runtime_checkable
class TraceSink(Protocol):
    """External observability sink."""

    def submit(self, record: TraceRecord) -> None:
        ...


def _submit(sink: TraceSink, record: TraceRecord) -> None:
    try:
        sink.submit(record)
    except Exception as e:
        log_event(
            _logger,
            "trace.error",
            level=logging.WARNING,
            name=record.name,
            run_id=record.run_id,
            error=str(e),
            error_type=type(e).__name__,
        )


def _bind_inputs(signature: inspect.Signature, args: tuple, kwargs: dict) -> Dict[str, Any]:
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return {"args": list(args), **kwargs}
    bound.apply_defaults()
    return {k: v for k, v in bound.arguments.items() if k != "self"}


def _outputs(text_parts: list, usage: Optional[UsageEvent]) -> Dict[str, Any]:
    return {"content": "".join(text_parts), "usage": usage.to_dict() if usage else None}


def _drive(inner: Iterator[Any], record: TraceRecord, sink: TraceSink) -> Iterator[Any]:
    text_parts: list = []
    usage: Optional[UsageEvent] = None
    try:
        for ev in inner:
            if isinstance(ev, TextEvent):
                text_parts.append(ev.text)
            elif isinstance(ev, UsageEvent):
                usage = ev
            yield ev
    except GeneratorExit:
        record.finish(_outputs(text_parts, usage), error=CANCELLED)
        _submit(sink, record)
        raise
    except BaseException as e:
        record.finish(_outputs(text_parts, usage), error=f"{type(e).__name__}: {e}")
        _submit(sink, record)
        raise
    else:
        record.finish(_outputs(text_parts, usage))
        _submit(sink, record)
    finally:
        close = getattr(inner, "close", None)
        if callable(close):
            close()


class _TracedStream:
    """Iterator returned by a traced call.

    The underlying ``_drive`` generator only reports once its body runs, so
    a stream closed or dropped before the first pull is reported here.
    """

    __slots__ = ("_inner", "_record", "_sink", "_gen", "_started", "_done")

    def __init__(self, inner: Iterator[Any], record: TraceRecord, sink: TraceSink) -> None:
        self._inner = inner
        self._record = record
        self._sink = sink
        self._gen = _drive(inner, record, sink)
        self._started = False
        self._done = False

    def __iter__(self) -> "_TracedStream":
        return self

    def __next__(self) -> Any:
        self._started = True
        try:
            return next(self._gen)
        except BaseException:
            self._done = True
            raise

    def close(self) -> None:
        if self._done:
            return
        self._done = True
        if self._started:
            self._gen.close()
            return
        self._record.finish(_outputs([], None), error=CANCELLED)
        _submit(self._sink, self._record)
        close = getattr(self._inner, "close", None)
        if callable(close):
            close()

    def __del__(self) -> None:
        self.close()


def wrap(
    name: str,
    run_type: str,
    fn: Callable[..., Iterator[Any]],
    sink: Optional[TraceSink],
    *,
    inputs: Optional[Callable[..., Dict[str, Any]]] = None,
) -> Callable[..., Iterator[Any]]:
    """Return ``fn`` instrumented to report a trace record to ``sink``.

    Args:
        name: Trace name (e.g. ``"Anthropic Chat"``).
        run_type: Trace run type (e.g. ``"llm"``).
        fn: Function returning an iterator of canonical events.
        sink: Destination for records; ``None`` disables tracing.
        inputs: Optional builder mapping the call arguments to the record's
            inputs. Defaults to the bound arguments of ``fn``.
    """
    if sink is None:
        return fn
    signature = inspect.signature(fn)

    @functools.wraps(fn)
    def traced(*args: Any, **kwargs: Any) -> _TracedStream:
        if inputs is not None:
            bound_inputs = inputs(*args, **kwargs)
        else:
            bound_inputs = _bind_inputs(signature, args, kwargs)
        record = TraceRecord(name=name, run_type=run_type, inputs=bound_inputs)
        try:
            inner = fn(*args, **kwargs)
        except BaseException as e:
            record.finish(None, error=f"{type(e).__name__}: {e}")
            _submit(sink, record)
            raise
        return _TracedStream(iter(inner), record, sink)

    return traced


def traceable(
    name: str,
    run_type: str = "llm",
    *,
    sink: Optional[TraceSink] = None,
    inputs: Optional[Callable[..., Dict[str, Any]]] = None,
) -> Callable[[Callable[..., Iterator[Any]]], Callable[..., Iterator[Any]]]:
    """Decorator form of :func:`wrap`."""

    def decorator(fn: Callable[..., Iterator[Any]]) -> Callable[..., Iterator[Any]]:
        return wrap(name, run_type, fn, sink, inputs=inputs)

    return decorator


def resolve_trace_sink(name: Optional[str] = None) -> Optional[TraceSink]:
    """Build the sink selected by ``name`` or ``RELAY_TRACE_SINK``.

    ``"log"`` (default) logs records, ``"otel"`` exports spans, ``"none"``
    disables tracing. Unknown names or a sink that cannot be constructed
    disable tracing with a warning instead of failing.
    """
    choice = (name or os.getenv("RELAY_TRACE_SINK") or DEFAULT_TRACE_SINK).strip().lower()
    if choice in ("none", "off", "disabled", ""):
        return None
    try:
        if choice == "log":
            return LoggingTraceSink()
        if choice == "otel":
            return OpenTelemetryTraceSink()
    except Exception as e:
        log_event(_logger, "trace.error", level=logging.WARNING, sink=choice, error=str(e))
        return None
    log_event(_logger, "trace.error", level=logging.WARNING, sink=choice, error="unknown trace sink")
    return None


__all__ = [
    "CANCELLED",
    "TraceRecord",
    "TraceSink",
    "resolve_trace_sink",
    "traceable",
    "wrap",
]

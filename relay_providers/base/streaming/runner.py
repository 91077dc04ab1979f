"""Shared streaming lifecycle for provider adapters.

``run_stream`` opens the transport, pipes raw chunks through a family
decoder and yields canonical events, logging ``stream.start``,
``stream.end`` and ``stream.error`` with a normalized schema. A stream the
caller abandons still logs ``stream.end``, marked ``cancelled``. The
transport stream is closed however iteration ends.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Iterator, Optional

from ..errors import ProviderError
from ..logging import LogContext, normalized_log_event
from .events import CanonicalEvent, TextEvent, UsageEvent
from .transport import iterate_transport, open_stream

Decoder = Callable[..., Iterator[CanonicalEvent]]


def run_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    opener: Callable[[], Iterable[Any]],
    decoder: Decoder,
    **start_fields: Any,
) -> Iterator[CanonicalEvent]:
    """Drive one streaming call.

    Args:
        logger: Adapter logger.
        ctx: Provider/model correlation context; ``ctx.provider`` and
            ``ctx.model`` label transport errors.
        opener: Zero-argument callable performing the SDK create call.
        decoder: Family decoder taking the raw chunk iterator.
        **start_fields: Extra fields for the ``stream.start`` event.
    """
    provider = ctx.provider or "unknown"
    normalized_log_event(logger, "stream.start", ctx, phase="start", **start_fields)
    t0 = time.perf_counter()
    emitted = 0
    usage: Optional[UsageEvent] = None
    chunks = None
    cancelled = False

    def log_end(**extra: Any) -> None:
        normalized_log_event(
            logger,
            "stream.end",
            ctx,
            phase="finalize",
            emitted=emitted,
            tokens=usage,
            total_duration_ms=(time.perf_counter() - t0) * 1000.0,
            **extra,
        )

    try:
        stream = open_stream(opener, provider, ctx.model)
        chunks = iterate_transport(stream, provider, ctx.model)
        for ev in decoder(chunks, logger=logger):
            if isinstance(ev, TextEvent):
                emitted += 1
            else:
                usage = ev
            yield ev
    except GeneratorExit:
        cancelled = True
        raise
    except ProviderError as e:
        normalized_log_event(
            logger,
            "stream.error",
            ctx,
            phase="stream" if chunks is not None else "start",
            level=logging.WARNING,
            error=e.message,
            error_code=e.code.value,
            emitted=emitted,
            tokens=usage,
        )
        raise
    finally:
        if chunks is not None:
            chunks.close()
        if cancelled:
            log_end(cancelled=True)
    log_end()


__all__ = ["run_stream"]

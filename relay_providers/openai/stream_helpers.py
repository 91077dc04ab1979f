"""OpenAI-compatible streaming decoder.

Chunks have no block structure: each carries ``choices[0].delta.content``
and the last one (when ``stream_options.include_usage`` was requested) a
``usage`` object with absolute counts. Usage is therefore reported as-is,
not accumulated.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, List, Optional

from ..base.errors import DecodeSkip
from ..base.logging import get_logger, log_event
from ..base.streaming import CanonicalEvent, TextEvent, UsageAccumulator
from ..base.streaming.chunks import field, path

_logger = get_logger("relay.openai.decoder")


def _delta_text(chunk: Any) -> Optional[str]:
    choices = field(chunk, "choices")
    if choices:
        text = path(choices[0], "delta", "content")
    else:
        # Gateways that flatten the single choice onto the chunk.
        delta = field(chunk, "delta")
        text = delta if isinstance(delta, str) else field(delta, "content")
    if text is not None and not isinstance(text, str):
        raise DecodeSkip("delta content is not text")
    return text


def _decode_chunk(chunk: Any) -> List[CanonicalEvent]:
    if chunk is None or isinstance(chunk, (str, bytes, int, float)):
        raise DecodeSkip(f"unrecognized chunk {type(chunk).__name__}")
    events: List[CanonicalEvent] = []
    text = _delta_text(chunk)
    if text:
        events.append(TextEvent(text))
    usage = field(chunk, "usage")
    if usage is not None:
        snapshot = UsageAccumulator()
        snapshot.overwrite(
            input_tokens=field(usage, "prompt_tokens"),
            output_tokens=field(usage, "completion_tokens"),
            cache_read_tokens=path(usage, "prompt_tokens_details", "cached_tokens"),
        )
        events.append(snapshot.to_event())
    return events


def decode_completion_stream(
    chunks: Iterable[Any], *, logger: Optional[logging.Logger] = None
) -> Iterator[CanonicalEvent]:
    """Decode Chat Completions chunks into canonical events."""
    log = logger or _logger
    for chunk in chunks:
        try:
            events = _decode_chunk(chunk)
        except DecodeSkip as skip:
            log_event(log, "decode.skip", level=logging.DEBUG, provider="openai", reason=str(skip))
            continue
        except (AttributeError, TypeError, ValueError, IndexError, KeyError) as e:
            log_event(log, "decode.skip", level=logging.DEBUG, provider="openai", reason=f"malformed chunk: {e}")
            continue
        yield from events


__all__ = ["decode_completion_stream"]

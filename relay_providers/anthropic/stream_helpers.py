"""Anthropic streaming decoder.

Turns the Messages event stream into canonical events. The decoder walks
three states:

``AWAITING_START``
    before ``message_start``.
``IN_BLOCK``
    message open; content blocks and deltas are turned into text.
``DRAINED``
    after ``message_stop``; anything further is skipped.

Usage is tracked in a :class:`UsageAccumulator` local to the call:
``message_start`` carries a full snapshot (overwritten and surfaced at once)
and ``message_delta`` carries the final output count (overwritten). When the
underlying sequence ends, one terminal ``UsageEvent`` is emitted from the
accumulated state.

Chunks may be SDK event objects or plain mappings. Unknown event types and
malformed chunks are skipped and logged at debug level.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from ..base.errors import DecodeSkip
from ..base.logging import get_logger, log_event
from ..base.streaming import CanonicalEvent, TextEvent, UsageAccumulator
from ..base.streaming.chunks import field, path

_logger = get_logger("relay.anthropic.decoder")

BLOCK_SEPARATOR = "\n"


class DecoderState(str, Enum):
    AWAITING_START = "awaiting-start"
    IN_BLOCK = "in-block"
    DRAINED = "drained"


class _Decode:
    """Working state of one decode call."""

    __slots__ = ("state", "usage", "blocks")

    def __init__(self) -> None:
        self.state = DecoderState.AWAITING_START
        self.usage = UsageAccumulator()
        self.blocks = 0

    def handle(self, chunk: Any) -> Iterator[CanonicalEvent]:
        kind = field(chunk, "type")
        if self.state is DecoderState.DRAINED:
            raise DecodeSkip(f"{kind} after message_stop")
        if kind == "message_start":
            yield from self._message_start(chunk)
        elif kind == "content_block_start":
            yield from self._block_start(chunk)
        elif kind == "content_block_delta":
            yield from self._block_delta(chunk)
        elif kind == "message_delta":
            self._message_delta(chunk)
        elif kind == "content_block_stop":
            pass
        elif kind == "message_stop":
            self.state = DecoderState.DRAINED
        else:
            raise DecodeSkip(f"unrecognized event type {kind!r}")

    def _message_start(self, chunk: Any) -> Iterator[CanonicalEvent]:
        self.state = DecoderState.IN_BLOCK
        usage = path(chunk, "message", "usage")
        if usage is None:
            return
        self.usage.overwrite(
            input_tokens=field(usage, "input_tokens"),
            output_tokens=field(usage, "output_tokens"),
            cache_write_tokens=field(usage, "cache_creation_input_tokens"),
            cache_read_tokens=field(usage, "cache_read_input_tokens"),
        )
        yield self.usage.to_event()

    def _block_start(self, chunk: Any) -> Iterator[CanonicalEvent]:
        # Every block counts toward the separator, text or not.
        later = self.blocks > 0
        self.blocks += 1
        block = field(chunk, "content_block")
        if field(block, "type") != "text":
            raise DecodeSkip(f"non-text content block {field(block, 'type')!r}")
        text = field(block, "text")
        if not isinstance(text, str):
            raise DecodeSkip("text block without text")
        self.state = DecoderState.IN_BLOCK
        if later:
            yield TextEvent(BLOCK_SEPARATOR)
        yield TextEvent(text)

    def _block_delta(self, chunk: Any) -> Iterator[CanonicalEvent]:
        delta = field(chunk, "delta")
        if field(delta, "type") != "text_delta":
            raise DecodeSkip(f"non-text delta {field(delta, 'type')!r}")
        text = field(delta, "text")
        if not isinstance(text, str):
            raise DecodeSkip("text_delta without text")
        yield TextEvent(text)

    def _message_delta(self, chunk: Any) -> None:
        output_tokens = path(chunk, "usage", "output_tokens")
        if output_tokens is None or not self.usage.set_output_tokens(output_tokens):
            raise DecodeSkip("message_delta without output token count")


def decode_message_stream(
    chunks: Iterable[Any], *, logger: Optional[logging.Logger] = None
) -> Iterator[CanonicalEvent]:
    """Decode Anthropic stream events into canonical events.

    Text deltas are yielded as they arrive, never coalesced. A terminal
    ``UsageEvent`` is always yielded once ``chunks`` is exhausted.
    """
    log = logger or _logger
    decode = _Decode()
    for chunk in chunks:
        try:
            # Materialize per chunk so a malformed chunk yields nothing at all.
            events = list(decode.handle(chunk))
        except DecodeSkip as skip:
            log_event(log, "decode.skip", level=logging.DEBUG, provider="anthropic", state=decode.state.value, reason=str(skip))
            continue
        except (AttributeError, TypeError, ValueError) as e:
            log_event(log, "decode.skip", level=logging.DEBUG, provider="anthropic", state=decode.state.value, reason=f"malformed chunk: {e}")
            continue
        yield from events
    yield decode.usage.to_event()


__all__ = ["BLOCK_SEPARATOR", "DecoderState", "decode_message_stream"]

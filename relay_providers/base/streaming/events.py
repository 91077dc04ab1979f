"""Canonical stream events.

Every backend decoder yields these two event types and nothing else.
``TextEvent``s keep the order in which the backend produced text;
``UsageEvent`` carries cumulative token counts, never deltas.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional, Union


@dataclass(frozen=True)
class TextEvent:
    """An incremental piece of assistant text."""

    text: str


@dataclass(frozen=True)
class UsageEvent:
    """Cumulative token usage as of this point in the stream."""

    input_tokens: int
    output_tokens: int
    cache_write_tokens: Optional[int] = None
    cache_read_tokens: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


CanonicalEvent = Union[TextEvent, UsageEvent]


@dataclass(frozen=True)
class StreamSummary:
    """Folded view of a canonical stream: full text and last usage seen."""

    text: str
    usage: Optional[UsageEvent]
    events: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.text,
            "usage": self.usage.to_dict() if self.usage else None,
        }


def accumulate_events(events: Iterable[CanonicalEvent]) -> StreamSummary:
    """Consume ``events`` and return the concatenated text and final usage."""
    text_parts = []
    usage: Optional[UsageEvent] = None
    count = 0
    for ev in events:
        count += 1
        if isinstance(ev, TextEvent):
            text_parts.append(ev.text)
        elif isinstance(ev, UsageEvent):
            usage = ev
    return StreamSummary(text="".join(text_parts), usage=usage, events=count)


__all__ = [
    "CanonicalEvent",
    "StreamSummary",
    "TextEvent",
    "UsageEvent",
    "accumulate_events",
]

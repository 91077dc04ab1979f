"""Per-call usage accumulation and cost calculation.

Backends disagree on how they report tokens. The Anthropic family sends an
authoritative snapshot when the message opens and a final output count in
``message_delta``; the OpenAI family sends one absolute ``usage`` object at
the end. ``UsageAccumulator`` supports both by *overwriting* rather than
adding, and is created fresh by each decode call so no count can leak from
one request into another.
"""

from __future__ import annotations

from typing import Any, Optional

from ..models import ModelDescriptor
from .events import UsageEvent


def coerce_count(value: Any) -> Optional[int]:
    """Coerce a reported token count to a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def _positive_or_none(value: Any) -> Optional[int]:
    count = coerce_count(value)
    return count if count else None


class UsageAccumulator:
    """Running token totals owned by one in-flight decode."""

    __slots__ = ("input_tokens", "output_tokens", "cache_write_tokens", "cache_read_tokens")

    def __init__(self) -> None:
        self.input_tokens = 0
        self.output_tokens = 0
        self.cache_write_tokens: Optional[int] = None
        self.cache_read_tokens: Optional[int] = None

    def overwrite(
        self,
        *,
        input_tokens: Any,
        output_tokens: Any,
        cache_write_tokens: Any = None,
        cache_read_tokens: Any = None,
    ) -> None:
        """Replace every field with an authoritative snapshot.

        Zero cache counts are stored as ``None`` (the backend did not touch
        the cache).
        """
        self.input_tokens = coerce_count(input_tokens) or 0
        self.output_tokens = coerce_count(output_tokens) or 0
        self.cache_write_tokens = _positive_or_none(cache_write_tokens)
        self.cache_read_tokens = _positive_or_none(cache_read_tokens)

    def set_output_tokens(self, output_tokens: Any) -> bool:
        """Replace the output count; returns False if the value is unusable."""
        count = coerce_count(output_tokens)
        if count is None:
            return False
        self.output_tokens = count
        return True

    def to_event(self) -> UsageEvent:
        return UsageEvent(
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            cache_write_tokens=self.cache_write_tokens,
            cache_read_tokens=self.cache_read_tokens,
        )


def calculate_cost(descriptor: ModelDescriptor, usage: UsageEvent) -> float:
    """Return the USD cost of ``usage`` at ``descriptor``'s per-million prices.

    Unknown prices count as zero.
    """
    def _part(price: Optional[float], tokens: Optional[int]) -> float:
        if not price or not tokens:
            return 0.0
        return (price / 1_000_000) * tokens

    return (
        _part(descriptor.cache_writes_price, usage.cache_write_tokens)
        + _part(descriptor.cache_reads_price, usage.cache_read_tokens)
        + _part(descriptor.input_price, usage.input_tokens)
        + _part(descriptor.output_price, usage.output_tokens)
    )


__all__ = ["UsageAccumulator", "calculate_cost", "coerce_count"]

"""
Resolved model descriptor.

Produced by :class:`relay_providers.base.resolver.ModelResolver` once per
request. Prices are USD per million tokens and are optional; they feed
:func:`relay_providers.base.streaming.usage.calculate_cost`.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelDescriptor:
    """Model id plus capability flags and pricing.

    Attributes:
        id: Backend model identifier sent on the wire.
        max_output_tokens: Output token ceiling, ``None`` when unknown.
        context_window: Context size in tokens, ``None`` when unknown.
        supports_images: Whether image parts are accepted.
        supports_cache_hints: Whether cache directives may be attached.
        input_price: USD per million input tokens.
        output_price: USD per million output tokens.
        cache_writes_price: USD per million cache-write tokens.
        cache_reads_price: USD per million cache-read tokens.
    """

    id: str
    max_output_tokens: Optional[int] = None
    context_window: Optional[int] = None
    supports_images: bool = False
    supports_cache_hints: bool = False
    input_price: Optional[float] = None
    output_price: Optional[float] = None
    cache_writes_price: Optional[float] = None
    cache_reads_price: Optional[float] = None

    def with_id(self, model_id: str) -> "ModelDescriptor":
        """Return a copy carrying ``model_id`` and the same capabilities."""
        return replace(self, id=model_id)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ModelDescriptor"]

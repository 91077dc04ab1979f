"""Anthropic model table.

Prices are USD per million tokens. The ``-latest`` aliases are not listed:
they do not accept cache_control blocks, so requesting one resolves to the
default model.
"""

from __future__ import annotations

from typing import Dict

from ..base.models import ModelDescriptor
from ..base.resolver import ModelResolver
from ..config.defaults import ANTHROPIC_DEFAULT_MODEL

ANTHROPIC_MODELS: Dict[str, ModelDescriptor] = {
    "claude-3-5-sonnet-20241022": ModelDescriptor(
        id="claude-3-5-sonnet-20241022",
        max_output_tokens=8192,
        context_window=200_000,
        supports_images=True,
        supports_cache_hints=True,
        input_price=3.0,
        output_price=15.0,
        cache_writes_price=3.75,
        cache_reads_price=0.3,
    ),
    "claude-3-5-haiku-20241022": ModelDescriptor(
        id="claude-3-5-haiku-20241022",
        max_output_tokens=8192,
        context_window=200_000,
        supports_images=False,
        supports_cache_hints=True,
        input_price=1.0,
        output_price=5.0,
        cache_writes_price=1.25,
        cache_reads_price=0.1,
    ),
    "claude-3-opus-20240229": ModelDescriptor(
        id="claude-3-opus-20240229",
        max_output_tokens=4096,
        context_window=200_000,
        supports_images=True,
        supports_cache_hints=True,
        input_price=15.0,
        output_price=75.0,
        cache_writes_price=18.75,
        cache_reads_price=1.5,
    ),
    "claude-3-haiku-20240307": ModelDescriptor(
        id="claude-3-haiku-20240307",
        max_output_tokens=4096,
        context_window=200_000,
        supports_images=True,
        supports_cache_hints=True,
        input_price=0.25,
        output_price=1.25,
        cache_writes_price=0.3,
        cache_reads_price=0.03,
    ),
}


def anthropic_resolver() -> ModelResolver:
    return ModelResolver(ANTHROPIC_MODELS, ANTHROPIC_DEFAULT_MODEL)


__all__ = ["ANTHROPIC_MODELS", "anthropic_resolver"]

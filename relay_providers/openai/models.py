"""OpenAI-compatible model defaults.

Compatible endpoints serve arbitrary model ids, so the resolver runs with an
open catalog: any requested id is accepted with the sane-default
capabilities below.
"""

from __future__ import annotations

from ..base.models import ModelDescriptor
from ..base.resolver import ModelResolver
from ..config.defaults import OPENAI_DEFAULT_MODEL

OPENAI_SANE_DEFAULTS = ModelDescriptor(
    id=OPENAI_DEFAULT_MODEL,
    max_output_tokens=None,
    context_window=128_000,
    supports_images=True,
    supports_cache_hints=False,
    input_price=0.0,
    output_price=0.0,
)


def openai_resolver() -> ModelResolver:
    return ModelResolver(
        {OPENAI_DEFAULT_MODEL: OPENAI_SANE_DEFAULTS},
        OPENAI_DEFAULT_MODEL,
        open_catalog=True,
        fallback=OPENAI_SANE_DEFAULTS,
    )


__all__ = ["OPENAI_SANE_DEFAULTS", "openai_resolver"]

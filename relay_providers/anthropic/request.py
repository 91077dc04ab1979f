"""Anthropic request transcoder.

Builds Messages API parameters from a system prompt and canonical turns.

* The system prompt goes in the top-level ``system`` field as a list with one
  text block.
* Cache hints are applied first (see ``base.cache_hints``); a part carrying a
  directive gets ``cache_control``. When any directive was attached the
  system block is marked as well and the prompt-caching beta header is
  added; otherwise no header is sent.
* Turn semantics are not validated; malformed turns are sent as given.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..base.cache_hints import apply_cache_hints, has_cache_hints
from ..base.errors import ConfigurationError, ErrorCode
from ..base.models import ContentPart, ConversationTurn, ModelDescriptor
from ..base.wire import WireRequest
from ..config.defaults import (
    ANTHROPIC_PROMPT_CACHING_BETA,
    DEFAULT_TEMPERATURE,
    FALLBACK_MAX_OUTPUT_TOKENS,
)

PROVIDER_NAME = "anthropic"
BETA_HEADER = "anthropic-beta"


def encode_part(part: ContentPart) -> Dict[str, Any]:
    """Map one canonical part to an Anthropic content block."""
    if part.type == "text":
        block: Dict[str, Any] = {"type": "text", "text": part.text or ""}
    elif part.type == "image":
        data = part.data or {}
        block = {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": data.get("media_type"),
                "data": data.get("data"),
            },
        }
    else:
        block = dict(part.data or {})
    if part.cache is not None:
        block["cache_control"] = part.cache.to_wire()
    return block


def encode_turn(turn: ConversationTurn) -> Dict[str, Any]:
    """Map one turn; string bodies stay strings unless they were annotated."""
    if isinstance(turn.content, str):
        return {"role": turn.role, "content": turn.content}
    return {"role": turn.role, "content": [encode_part(p) for p in turn.content]}


def encode_request(
    system_prompt: str,
    turns: Sequence[ConversationTurn],
    descriptor: ModelDescriptor,
) -> WireRequest:
    """Build the streaming Messages request for ``descriptor``.

    Raises:
        ConfigurationError: If the descriptor carries no model id.
    """
    if not descriptor.id:
        raise ConfigurationError(
            code=ErrorCode.CONFIGURATION,
            message="no model could be resolved",
            provider=PROVIDER_NAME,
        )
    hinted = apply_cache_hints(turns, descriptor)
    caching = has_cache_hints(hinted)

    system_block: Dict[str, Any] = {"type": "text", "text": system_prompt}
    if caching:
        system_block["cache_control"] = {"type": "ephemeral"}
    messages: List[Dict[str, Any]] = [encode_turn(t) for t in hinted]

    params: Dict[str, Any] = {
        "model": descriptor.id,
        "max_tokens": descriptor.max_output_tokens or FALLBACK_MAX_OUTPUT_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
        "system": [system_block],
        "messages": messages,
        "stream": True,
    }
    headers = {BETA_HEADER: ANTHROPIC_PROMPT_CACHING_BETA} if caching else {}
    return WireRequest(params=params, headers=headers)


__all__ = ["encode_part", "encode_request", "encode_turn"]

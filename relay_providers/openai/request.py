"""OpenAI-compatible request transcoder.

* The system prompt becomes a synthetic leading ``system`` message.
* Parts map to Chat Completions content parts; images become data URLs.
* A cache directive is forwarded as ``cache_control`` on its part, the
  convention OpenAI-compatible gateways fronting cache-capable models use.
  Directives are only present for descriptors that support cache hints.
* A turn that is a single, unannotated text part is sent as a plain string.
* ``stream_options.include_usage`` asks for a terminal usage chunk.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Union

from ..base.cache_hints import apply_cache_hints
from ..base.errors import ConfigurationError, ErrorCode
from ..base.models import ContentPart, ConversationTurn, ModelDescriptor
from ..base.wire import WireRequest
from ..config.defaults import DEFAULT_TEMPERATURE, FALLBACK_MAX_OUTPUT_TOKENS

PROVIDER_NAME = "openai"


def encode_part(part: ContentPart) -> Dict[str, Any]:
    """Map one canonical part to a Chat Completions content part."""
    if part.type == "text":
        out: Dict[str, Any] = {"type": "text", "text": part.text or ""}
    elif part.type == "image":
        data = part.data or {}
        out = {
            "type": "image_url",
            "image_url": {"url": f"data:{data.get('media_type')};base64,{data.get('data')}"},
        }
    else:
        out = dict(part.data or {})
    if part.cache is not None:
        out["cache_control"] = part.cache.to_wire()
    return out


def _content(turn: ConversationTurn) -> Union[str, List[Dict[str, Any]]]:
    if isinstance(turn.content, str):
        return turn.content
    parts = turn.content
    if len(parts) == 1 and parts[0].type == "text" and parts[0].cache is None:
        return parts[0].text or ""
    return [encode_part(p) for p in parts]


def encode_turn(turn: ConversationTurn) -> Dict[str, Any]:
    return {"role": turn.role, "content": _content(turn)}


def encode_request(
    system_prompt: str,
    turns: Sequence[ConversationTurn],
    descriptor: ModelDescriptor,
    *,
    include_usage: bool = True,
) -> WireRequest:
    """Build the streaming Chat Completions request for ``descriptor``.

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
    messages: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
    messages.extend(encode_turn(t) for t in hinted)

    params: Dict[str, Any] = {
        "model": descriptor.id,
        "messages": messages,
        "max_tokens": descriptor.max_output_tokens or FALLBACK_MAX_OUTPUT_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
        "stream": True,
    }
    if include_usage:
        params["stream_options"] = {"include_usage": True}
    return WireRequest(params=params)


__all__ = ["encode_part", "encode_request", "encode_turn"]

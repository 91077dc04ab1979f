"""
Content parts of a conversation turn.

A turn's content is an ordered sequence of ``ContentPart`` values. Only
``text`` parts are interpreted by this package; ``image`` parts are mapped to
each backend's image shape and ``other`` parts are forwarded verbatim. Any
part may carry a :class:`CacheDirective`, which is attached by the cache hint
policy and never by callers.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Mapping, Optional


ContentPartType = Literal[
    "text",   # Plain text
    "image",  # Base64 image; ``data`` holds ``media_type`` and ``data``
    "other",  # Opaque; ``data`` is sent as the backend part unchanged
]


@dataclass(frozen=True)
class CacheDirective:
    """Request that the backend cache the prompt prefix ending at this part."""

    type: Literal["ephemeral"] = "ephemeral"

    def to_wire(self) -> Dict[str, str]:
        return {"type": self.type}


EPHEMERAL = CacheDirective()


@dataclass(frozen=True)
class ContentPart:
    """A single piece of turn content.

    Attributes:
        type: The semantic kind of the part.
        text: Text body for ``text`` parts.
        data: Payload for ``image`` and ``other`` parts.
        cache: Optional cache directive set by the cache hint policy.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Mapping[str, Any]] = None
    cache: Optional[CacheDirective] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, media_type: str, data: str) -> "ContentPart":
        """Build an image part from base64 ``data`` of the given ``media_type``."""
        return cls(type="image", data={"media_type": media_type, "data": data})

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the part."""
        out = asdict(self)
        if self.data is not None:
            out["data"] = dict(self.data)
        return {k: v for k, v in out.items() if v is not None}


__all__ = [
    "CacheDirective",
    "ContentPart",
    "ContentPartType",
    "EPHEMERAL",
]

"""
Conversation turn DTO.

A ``ConversationTurn`` is immutable: content is either a plain string or a
tuple of :class:`ContentPart`. Transcoders read turns and derive new ones;
they never modify a caller's turn.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Sequence, Tuple, Union

from .content_part import ContentPart


Role = Literal["user", "assistant", "system"]


@dataclass(frozen=True)
class ConversationTurn:
    """One turn of a conversation.

    Attributes:
        role: Author of the turn.
        content: Plain text or an ordered tuple of content parts. Lists are
            converted to tuples on construction.
    """

    role: Role
    content: Union[str, Tuple[ContentPart, ...]]

    def __post_init__(self) -> None:
        if not isinstance(self.content, (str, tuple)):
            object.__setattr__(self, "content", tuple(self.content))

    @classmethod
    def user(cls, content: Union[str, Sequence[ContentPart]]) -> "ConversationTurn":
        return cls(role="user", content=content if isinstance(content, str) else tuple(content))

    @classmethod
    def assistant(cls, content: Union[str, Sequence[ContentPart]]) -> "ConversationTurn":
        return cls(role="assistant", content=content if isinstance(content, str) else tuple(content))

    def parts(self) -> Tuple[ContentPart, ...]:
        """Return the content as parts, wrapping a string body as one text part."""
        if isinstance(self.content, str):
            return (ContentPart.of_text(self.content),)
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.content, str):
            return {"role": self.role, "content": self.content}
        return {"role": self.role, "content": [p.to_dict() for p in self.content]}


__all__ = ["ConversationTurn", "Role"]

"""Canonical message model parts (one class family per module)."""

from .content_part import EPHEMERAL, CacheDirective, ContentPart, ContentPartType
from .conversation_turn import ConversationTurn, Role
from .model_descriptor import ModelDescriptor

__all__ = [
    "CacheDirective",
    "ContentPart",
    "ContentPartType",
    "ConversationTurn",
    "EPHEMERAL",
    "ModelDescriptor",
    "Role",
]

"""Canonical message model public surface.

Re-exports the DTOs under ``relay_providers.base.models_parts``.
"""

from .models_parts import (
    EPHEMERAL,
    CacheDirective,
    ContentPart,
    ContentPartType,
    ConversationTurn,
    ModelDescriptor,
    Role,
)

__all__ = [
    "CacheDirective",
    "ContentPart",
    "ContentPartType",
    "ConversationTurn",
    "EPHEMERAL",
    "ModelDescriptor",
    "Role",
]

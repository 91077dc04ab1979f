"""Backend-agnostic core: message model, errors, streaming, tracing."""

from .errors import ConfigurationError, ErrorCode, ProviderError, TransportError
from .models import CacheDirective, ContentPart, ConversationTurn, ModelDescriptor

__all__ = [
    "CacheDirective",
    "ConfigurationError",
    "ContentPart",
    "ConversationTurn",
    "ErrorCode",
    "ModelDescriptor",
    "ProviderError",
    "TransportError",
]

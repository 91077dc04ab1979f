"""relay_providers package

Streaming normalization layer for LLM backends.

Purpose:
    Give callers one conversation model and one event stream across backend
    families. Each adapter turns a system prompt plus canonical turns into a
    backend request, decodes the backend's streaming chunks into canonical
    ``TextEvent``/``UsageEvent`` values and reports every call to a trace
    sink.

Public API (re-exported):
    - Version: ``__version__``
    - Message model: :class:`ConversationTurn`, :class:`ContentPart`,
      :class:`CacheDirective`, :class:`ModelDescriptor`
    - Events: :class:`TextEvent`, :class:`UsageEvent`,
      :func:`accumulate_events`
    - Errors: :class:`ProviderError`, :class:`ConfigurationError`,
      :class:`TransportError`, :class:`ErrorCode`
    - Factory: :func:`create`, :class:`ProviderFactory`
"""

from .base.errors import ConfigurationError, ErrorCode, ProviderError, TransportError
from .base.factory import ProviderFactory, UnknownProviderError
from .base.interfaces import ApiProvider
from .base.models import CacheDirective, ContentPart, ConversationTurn, ModelDescriptor
from .base.streaming import StreamSummary, TextEvent, UsageEvent, accumulate_events, calculate_cost

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ApiProvider",
    "CacheDirective",
    "ConfigurationError",
    "ContentPart",
    "ConversationTurn",
    "ErrorCode",
    "ModelDescriptor",
    "ProviderError",
    "ProviderFactory",
    "StreamSummary",
    "TextEvent",
    "TransportError",
    "UnknownProviderError",
    "UsageEvent",
    "accumulate_events",
    "calculate_cost",
    "create",
]


def create(provider_name: str, **kwargs):
    """Instantiate a provider adapter through :class:`ProviderFactory`.

    Parameters
    ----------
    provider_name:
        Canonical backend-family name (``"anthropic"`` or ``"openai"``).
    **kwargs:
        Forwarded to :meth:`ProviderFactory.create` (``options``, any
        ``HandlerOptions`` field, ``client``, ``trace_sink``, ``resolver``).
    """
    return ProviderFactory.create(provider_name, **kwargs)

"""Errors parts package public surface.

Prefer importing from ``relay_providers.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ConfigurationError, ProviderError, TransportError
from .signals import DecodeSkip, ObservabilityError
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "DecodeSkip",
    "ObservabilityError",
    "classify_exception",
]

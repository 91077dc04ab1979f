"""Provider error taxonomy public surface.

Re-exports the implementations under ``relay_providers.base.errors_parts``
so callers have one stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ConfigurationError, ProviderError, TransportError
from .errors_parts.signals import DecodeSkip, ObservabilityError
from .errors_parts.classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "DecodeSkip",
    "ObservabilityError",
    "classify_exception",
]

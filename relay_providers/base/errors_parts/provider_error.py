"""
Structured provider error types.

``ProviderError`` is the base for every failure the package surfaces to a
caller. Subclasses only narrow the meaning; all carry the same fields so a
caller can log or branch on ``code`` without caring about the backend.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A provider failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model id associated with the failure.
        retryable: Hint for a higher layer's retry policy. Never acted on here.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


class ConfigurationError(ProviderError):
    """Unusable credentials or base URL; raised before any transport call."""


class TransportError(ProviderError):
    """Connection, authentication or mid-stream failure reported by the transport."""


__all__ = ["ProviderError", "ConfigurationError", "TransportError"]

"""
Normalized failure categories for streaming calls.

``ErrorCode`` values travel on every :class:`ProviderError` and in the
``error_code`` key of structured log events. Values are lowercase snake_case
and are treated as a stable contract by log consumers.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure category attached to provider errors."""

    CONFIGURATION = "configuration"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    DISCONNECTED = "disconnected"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

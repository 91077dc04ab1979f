"""
Map transport exceptions raised by vendor SDKs onto :class:`ErrorCode`.

The vendor SDKs (``anthropic``, ``openai``) and ``httpx`` raise their own
exception hierarchies. Rather than importing each of them, classification
reads the HTTP status the exception carries, then falls back to the
exception type name and message text.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by ``exc`` or ``None``.

    Checked in order: ``exc.status_code``, ``exc.status``,
    ``exc.response.status_code``.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}

# Exception class names used by httpx and the vendor SDKs for failures that
# carry no HTTP status.
_TYPE_NAME_MAP: Dict[str, ErrorCode] = {
    "APIConnectionError": ErrorCode.DISCONNECTED,
    "APITimeoutError": ErrorCode.TIMEOUT,
    "ConnectError": ErrorCode.DISCONNECTED,
    "RemoteProtocolError": ErrorCode.DISCONNECTED,
    "ReadError": ErrorCode.DISCONNECTED,
    "ReadTimeout": ErrorCode.TIMEOUT,
    "ConnectTimeout": ErrorCode.TIMEOUT,
    "ConnectionError": ErrorCode.DISCONNECTED,
    "ConnectionRefusedError": ErrorCode.DISCONNECTED,
    "ConnectionResetError": ErrorCode.DISCONNECTED,
}


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristics for exceptions without status or known type."""
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key", "authentication")),
        (ErrorCode.DISCONNECTED, ("connection", "disconnect", "peer closed")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
        (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
    )
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into an :class:`ErrorCode`.

    Precedence:
        1. ``ProviderError`` passthrough.
        2. Timeout exceptions.
        3. HTTP status mapping.
        4. Known transport exception class names (walking the MRO).
        5. Message heuristics.
        6. ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    for klass in type(exc).__mro__:
        if klass.__name__ in _TYPE_NAME_MAP:
            return _TYPE_NAME_MAP[klass.__name__]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]

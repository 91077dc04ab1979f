"""
Non-fatal signals used inside the streaming layer.

Neither type ever reaches a caller: ``DecodeSkip`` is caught by the decode
loop and ``ObservabilityError`` by the instrumentation wrapper.
"""
from __future__ import annotations


class DecodeSkip(Exception):
    """Raised by a chunk handler for a chunk shape it does not recognize."""


class ObservabilityError(Exception):
    """Raised by a trace sink that cannot deliver a record."""


__all__ = ["DecodeSkip", "ObservabilityError"]

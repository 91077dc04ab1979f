"""Uniform field access for backend chunks.

Vendor SDKs hand back Pydantic objects while recorded fixtures and some
gateways produce plain mappings. Decoders read both through :func:`field`.
"""

from __future__ import annotations

from typing import Any, Mapping


def field(obj: Any, name: str, default: Any = None) -> Any:
    """Return ``obj[name]`` for mappings, ``obj.name`` otherwise."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def path(obj: Any, *names: str) -> Any:
    """Follow ``names`` through nested chunk fields; ``None`` on any gap."""
    for name in names:
        obj = field(obj, name)
        if obj is None:
            return None
    return obj


__all__ = ["field", "path"]

"""Wire request container shared by the request transcoders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class WireRequest:
    """Backend request parameters plus any opt-in transport headers.

    ``params`` are passed as keyword arguments to the SDK create call and
    ``headers`` as its ``extra_headers``.
    """

    params: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


__all__ = ["WireRequest"]

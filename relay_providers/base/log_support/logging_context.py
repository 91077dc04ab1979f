"""Correlation fields attached to every streaming log event."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Provider, model and request ids merged into each structured log line.

    ``extra`` entries are flattened into the payload; ``None`` values are
    left out.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged = {"provider": self.provider, "model": self.model, "request_id": self.request_id}
        merged.update(self.extra or {})
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]

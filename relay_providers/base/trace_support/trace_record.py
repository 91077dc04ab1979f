"""Trace record built around one instrumented call.

A record lives only for the duration of the call: the wrapper fills it,
hands it to a sink and drops it.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


def to_jsonable(value: Any) -> Any:
    """Convert DTOs, mappings and sequences into plain JSON-friendly values."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_jsonable(to_dict())
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return repr(value)


@dataclass
class TraceRecord:
    """Inputs, outputs and outcome of one traced call."""

    name: str
    run_type: str
    inputs: Dict[str, Any]
    outputs: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    def finish(self, outputs: Optional[Dict[str, Any]], error: Optional[str] = None) -> None:
        self.outputs = outputs
        self.error = error
        self.end_time = time.time()

    @property
    def duration_ms(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time) * 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "name": self.name,
            "run_type": self.run_type,
            "inputs": to_jsonable(self.inputs),
            "outputs": to_jsonable(self.outputs),
            "error": self.error,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_ms": self.duration_ms,
        }


__all__ = ["TraceRecord", "to_jsonable"]

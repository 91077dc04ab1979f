"""Provider adapter contract.

Adapters are selected at configuration time (see ``base.factory``); callers
depend only on this protocol.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Sequence, runtime_checkable

from .models import ConversationTurn, ModelDescriptor
from .streaming import CanonicalEvent


@runtime_checkable
class ApiProvider(Protocol):
    """Converse-and-stream capability of one backend family."""

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"anthropic"``."""
        ...

    def get_model(self) -> ModelDescriptor:
        """Return the resolved model descriptor. Pure; performs no I/O."""
        ...

    def create_message(
        self, system_prompt: str, turns: Sequence[ConversationTurn]
    ) -> Iterator[CanonicalEvent]:
        """Start a streaming call and return its single-pass event iterator.

        Configuration problems raise ``ConfigurationError`` immediately.
        Transport failures surface as ``TransportError`` while iterating;
        events already yielded remain valid.
        """
        ...


__all__ = ["ApiProvider"]

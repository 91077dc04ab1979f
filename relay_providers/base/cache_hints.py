"""Cache hint policy.

Backends cap the number of cache breakpoints per request, so directives are
spent only where they pay off: the two most recent user turns. In a
multi-turn conversation the previous user turn is the end of the prefix the
backend already cached on the last request, and the latest user turn is the
end of the prefix the next request will reuse. Marking only the *last* part
of each of those turns makes the cached prefix as long as possible.

The caller's turns are never modified; annotated turns are new objects.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Sequence, Tuple

from .models import EPHEMERAL, ConversationTurn, ModelDescriptor

MAX_CACHED_USER_TURNS = 2


def cache_hint_indices(turns: Sequence[ConversationTurn]) -> Tuple[int, ...]:
    """Return the indices of the (at most two) most recent user turns, ascending."""
    user_indices = [i for i, turn in enumerate(turns) if turn.role == "user"]
    return tuple(user_indices[-MAX_CACHED_USER_TURNS:])


def _annotate_last_part(turn: ConversationTurn) -> ConversationTurn:
    parts = turn.parts()
    if not parts:
        return turn
    last = replace(parts[-1], cache=EPHEMERAL)
    return replace(turn, content=parts[:-1] + (last,))


def apply_cache_hints(
    turns: Sequence[ConversationTurn], descriptor: ModelDescriptor
) -> Tuple[ConversationTurn, ...]:
    """Attach ephemeral cache directives according to the policy above.

    Returns ``turns`` as a tuple, unchanged, when the model does not support
    cache hints.
    """
    if not descriptor.supports_cache_hints:
        return tuple(turns)
    selected = set(cache_hint_indices(turns))
    return tuple(
        _annotate_last_part(turn) if i in selected else turn
        for i, turn in enumerate(turns)
    )


def has_cache_hints(turns: Sequence[ConversationTurn]) -> bool:
    """True when any part of any turn carries a cache directive."""
    return any(
        part.cache is not None
        for turn in turns
        if not isinstance(turn.content, str)
        for part in turn.content
    )


__all__ = [
    "MAX_CACHED_USER_TURNS",
    "apply_cache_hints",
    "cache_hint_indices",
    "has_cache_hints",
]

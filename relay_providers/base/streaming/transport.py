"""Transport boundary for streaming calls.

``open_stream`` and ``iterate_transport`` are the only places SDK exceptions
are caught. Both convert them into :class:`TransportError` with a classified
code and the original exception chained, so callers never see vendor
exception types. ``iterate_transport`` closes the SDK stream when iteration
ends for any reason, including the caller abandoning the generator.
"""

from __future__ import annotations

import contextlib
from typing import Any, Callable, Iterator

from ..errors import ErrorCode, ProviderError, TransportError, classify_exception

_RETRYABLE = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.DISCONNECTED, ErrorCode.UNAVAILABLE)


def to_transport_error(exc: BaseException, provider: str, model: str | None) -> TransportError:
    """Wrap an SDK exception as a :class:`TransportError`."""
    code = classify_exception(exc)
    return TransportError(
        code=code,
        message=str(exc) or type(exc).__name__,
        provider=provider,
        model=model,
        retryable=code in _RETRYABLE,
        raw=exc,
    )


def open_stream(opener: Callable[[], Any], provider: str, model: str | None) -> Any:
    """Call ``opener`` (the SDK create call) with error normalization."""
    try:
        return opener()
    except ProviderError:
        raise
    except Exception as e:
        raise to_transport_error(e, provider, model) from e


def _close(stream: Any) -> None:
    closer = getattr(stream, "close", None)
    if callable(closer):
        with contextlib.suppress(Exception):
            closer()


def iterate_transport(stream: Any, provider: str, model: str | None) -> Iterator[Any]:
    """Yield raw chunks from ``stream``; one chunk read per pull."""
    try:
        for chunk in stream:
            yield chunk
    except ProviderError:
        raise
    except Exception as e:
        raise to_transport_error(e, provider, model) from e
    finally:
        _close(stream)


__all__ = ["iterate_transport", "open_stream", "to_transport_error"]

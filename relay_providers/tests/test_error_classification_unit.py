"""Unit tests for transport exception classification and wrapping."""
from __future__ import annotations

import pytest

from relay_providers.base.errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    TransportError,
    classify_exception,
)
from relay_providers.base.streaming import iterate_transport, open_stream, to_transport_error


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class _Response:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code


class _ResponseError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__("boom")
        self.response = _Response(status_code)


class APIConnectionError(Exception):
    """Stand-in with the same class name the SDKs use."""


@pytest.mark.parametrize(
    "status, code",
    [
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (529, ErrorCode.UNAVAILABLE),
    ],
)
def test_status_mapping(status, code):
    assert classify_exception(_StatusError(status)) is code
    assert classify_exception(_ResponseError(status)) is code


def test_type_name_and_timeout_mapping():
    assert classify_exception(APIConnectionError("x")) is ErrorCode.DISCONNECTED
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT
    assert classify_exception(ConnectionResetError()) is ErrorCode.DISCONNECTED


def test_message_heuristics():
    assert classify_exception(RuntimeError("Rate limit exceeded")) is ErrorCode.RATE_LIMIT
    assert classify_exception(RuntimeError("server overloaded")) is ErrorCode.UNAVAILABLE
    assert classify_exception(RuntimeError("mystery")) is ErrorCode.UNKNOWN


def test_provider_error_passthrough():
    err = ConfigurationError(code=ErrorCode.CONFIGURATION, message="m", provider="p")

    assert classify_exception(err) is ErrorCode.CONFIGURATION
    assert isinstance(err, ProviderError)


def test_to_transport_error_marks_retryable_codes():
    retryable = to_transport_error(_StatusError(429), "openai", "gpt")
    fatal = to_transport_error(_StatusError(401), "openai", "gpt")

    assert isinstance(retryable, TransportError)
    assert retryable.retryable is True and retryable.model == "gpt"
    assert fatal.retryable is False


def test_open_stream_wraps_and_chains():
    def opener():
        raise _StatusError(503)

    with pytest.raises(TransportError) as info:
        open_stream(opener, "anthropic", "claude")
    assert isinstance(info.value.__cause__, _StatusError)
    assert info.value.provider == "anthropic"


def test_open_stream_lets_provider_errors_through():
    err = ConfigurationError(code=ErrorCode.CONFIGURATION, message="m", provider="p")

    def opener():
        raise err

    with pytest.raises(ConfigurationError) as info:
        open_stream(opener, "p", None)
    assert info.value is err


def test_iterate_transport_closes_stream_on_early_exit():
    class _Stream:
        closed = False

        def __iter__(self):
            return iter([1, 2, 3])

        def close(self):
            self.closed = True

    stream = _Stream()
    gen = iterate_transport(stream, "p", None)
    assert next(gen) == 1
    gen.close()

    assert stream.closed is True


def test_str_includes_provider_model_and_code():
    err = TransportError(code=ErrorCode.TIMEOUT, message="slow", provider="openai", model="gpt")

    assert str(err) == "openai:gpt timeout: slow"

"""AnthropicProvider adapter.

Streams conversations through the Anthropic Messages API
(``client.messages.create(..., stream=True)``) and normalizes the result to
canonical events.

Key behaviors:
* ``create_message`` validates configuration eagerly, so a missing API key or
  a malformed base URL raises :class:`ConfigurationError` before any
  transport call.
* The request is built by ``anthropic.request`` (cache hints + beta header
  only when hints were attached) and decoded by ``anthropic.stream_helpers``.
* SDK exceptions become :class:`TransportError`; nothing is retried here.
* Each call is traced through ``base.tracing`` as ``"Anthropic Chat"``.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence

import anthropic

from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger
from ..base.models import ConversationTurn, ModelDescriptor
from ..base.resolver import ModelResolver
from ..base.streaming import CanonicalEvent, run_stream
from ..base.tracing import TraceSink, resolve_trace_sink, wrap
from ..base.dto import HandlerOptions
from ..base.validation import validate_handler_options
from ..base.wire import WireRequest
from .models import anthropic_resolver
from .request import encode_request
from .stream_helpers import decode_message_stream

TRACE_NAME = "Anthropic Chat"

_UNSET: Any = object()


class AnthropicProvider:
    """Adapter for the Anthropic backend family.

    Holds only immutable configuration; every ``create_message`` call builds
    its own client handle, request and decoder state.
    """

    def __init__(
        self,
        options: Optional[HandlerOptions] = None,
        *,
        client: Any = None,
        trace_sink: Optional[TraceSink] = _UNSET,
        resolver: Optional[ModelResolver] = None,
    ) -> None:
        self._options = options or HandlerOptions()
        self._client = client
        self._resolver = resolver or anthropic_resolver()
        self._logger = get_logger("relay.anthropic")
        sink = resolve_trace_sink() if trace_sink is _UNSET else trace_sink
        self._stream = wrap(TRACE_NAME, "llm", self._stream_impl, sink, inputs=self._trace_inputs)

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def options(self) -> HandlerOptions:
        return self._options

    def get_model(self) -> ModelDescriptor:
        """Resolve the configured model id; falls back to the default model."""
        return self._resolver.resolve(self._options.model_id)

    def create_message(
        self, system_prompt: str, turns: Sequence[ConversationTurn]
    ) -> Iterator[CanonicalEvent]:
        """Stream a reply to ``turns`` as canonical events.

        Raises:
            ConfigurationError: Immediately, when credentials or base URL are
                unusable.
            TransportError: While iterating, on connection, authentication or
                mid-stream failures.
        """
        descriptor = self.get_model()
        self._validate(descriptor)
        request = encode_request(system_prompt, turns, descriptor)
        return self._stream(system_prompt, tuple(turns), descriptor, request)

    # ---- Internal helpers ----

    def _validate(self, descriptor: ModelDescriptor) -> None:
        # An injected client carries its own credentials.
        if self._client is not None:
            return
        validate_handler_options(self._options, self.provider_name, descriptor.id, logger=self._logger)

    def _create_client(self) -> Any:
        """Instantiate the Anthropic SDK client on the pooled HTTP client."""
        if self._client is not None:
            return self._client
        return anthropic.Anthropic(
            api_key=self._options.api_key,
            base_url=self._options.base_url or None,
            http_client=get_httpx_client("anthropic"),
        )

    @staticmethod
    def _trace_inputs(system_prompt, turns, descriptor, request):
        return {
            "system_prompt": system_prompt,
            "messages": [t.to_dict() for t in turns],
            "model": descriptor.id,
        }

    def _stream_impl(
        self,
        system_prompt: str,
        turns: Sequence[ConversationTurn],
        descriptor: ModelDescriptor,
        request: WireRequest,
    ) -> Iterator[CanonicalEvent]:
        client = self._create_client()
        kwargs = dict(request.params)
        if request.headers:
            kwargs["extra_headers"] = dict(request.headers)
        yield from run_stream(
            logger=self._logger,
            ctx=LogContext(provider=self.provider_name, model=descriptor.id),
            opener=lambda: client.messages.create(**kwargs),
            decoder=decode_message_stream,
            cache_hints=bool(request.headers),
            max_tokens=request.params["max_tokens"],
            turns=len(turns),
        )


__all__ = ["AnthropicProvider", "TRACE_NAME"]

"""OpenAI-compatible provider adapter.

Streams through ``client.chat.completions.create(..., stream=True)``. Any
endpoint speaking the Chat Completions protocol works; a base URL whose
host is ``azure.com`` or a subdomain of it selects ``AzureOpenAI`` with the
configured API version.

Key behaviors:
* Configuration is validated eagerly in ``create_message``.
* ``include_stream_options`` (default on) requests the terminal usage chunk;
  turn it off for compatible servers that reject ``stream_options``.
* SDK exceptions become :class:`TransportError`; nothing is retried here.
* Each call is traced through ``base.tracing`` as ``"OpenAI Chat"``.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence

import openai

from ..base.dto import HandlerOptions
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger
from ..base.models import ConversationTurn, ModelDescriptor
from ..base.resolver import ModelResolver
from ..base.streaming import CanonicalEvent, run_stream
from ..base.tracing import TraceSink, resolve_trace_sink, wrap
from ..base.urls import is_azure_host
from ..base.validation import validate_handler_options
from ..base.wire import WireRequest
from ..config.defaults import AZURE_OPENAI_DEFAULT_API_VERSION
from .models import openai_resolver
from .request import encode_request
from .stream_helpers import decode_completion_stream

TRACE_NAME = "OpenAI Chat"

_UNSET: Any = object()

__all__ = ["OpenAIProvider", "TRACE_NAME"]


class OpenAIProvider:
    """Adapter for OpenAI and OpenAI-compatible (including Azure) backends."""

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
        self._resolver = resolver or openai_resolver()
        self._logger = get_logger("relay.openai")
        sink = resolve_trace_sink() if trace_sink is _UNSET else trace_sink
        self._stream = wrap(TRACE_NAME, "llm", self._stream_impl, sink, inputs=self._trace_inputs)

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def is_azure(self) -> bool:
        return is_azure_host(self._options.base_url)

    def get_model(self) -> ModelDescriptor:
        """Resolve the configured model id (any id is accepted)."""
        return self._resolver.resolve(self._options.model_id)

    def create_message(
        self, system_prompt: str, turns: Sequence[ConversationTurn]
    ) -> Iterator[CanonicalEvent]:
        """Stream a reply to ``turns`` as canonical events."""
        descriptor = self.get_model()
        self._validate(descriptor)
        request = encode_request(
            system_prompt,
            turns,
            descriptor,
            include_usage=self._options.include_stream_options,
        )
        return self._stream(system_prompt, tuple(turns), descriptor, request)

    # ---- Internal helpers ----

    def _validate(self, descriptor: ModelDescriptor) -> None:
        # An injected client carries its own credentials.
        if self._client is not None:
            return
        validate_handler_options(self._options, self.provider_name, descriptor.id, logger=self._logger)

    def _create_client(self) -> Any:
        """Instantiate the OpenAI (or Azure OpenAI) SDK client."""
        if self._client is not None:
            return self._client
        http_client = get_httpx_client("openai")
        if self.is_azure:
            return openai.AzureOpenAI(
                base_url=self._options.base_url,
                api_key=self._options.api_key,
                api_version=self._options.azure_api_version or AZURE_OPENAI_DEFAULT_API_VERSION,
                http_client=http_client,
            )
        return openai.OpenAI(
            base_url=self._options.base_url or None,
            api_key=self._options.api_key,
            http_client=http_client,
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
        params = dict(request.params)
        yield from run_stream(
            logger=self._logger,
            ctx=LogContext(provider=self.provider_name, model=descriptor.id, extra={"azure": self.is_azure or None}),
            opener=lambda: client.chat.completions.create(**params),
            decoder=decode_completion_stream,
            include_usage="stream_options" in params,
            max_tokens=params["max_tokens"],
            turns=len(turns),
        )

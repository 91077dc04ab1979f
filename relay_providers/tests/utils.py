"""Test doubles shared across the suite.

The adapters accept an injected SDK client, so tests hand them small fakes
exposing only ``messages.create`` (Anthropic) or
``chat.completions.create`` (OpenAI) and returning a scripted stream.
"""
from __future__ import annotations

import json
import logging
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional


class FakeStream:
    """Iterable SDK stream that can fail after a number of chunks."""

    def __init__(self, chunks: Iterable[Any], fail_after: Optional[int] = None, error: Optional[BaseException] = None):
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self._error = error
        self.closed = False
        self.pulled = 0

    def __iter__(self):
        for i, chunk in enumerate(self._chunks):
            if self._fail_after is not None and i >= self._fail_after:
                raise self._error or ConnectionError("connection reset by peer")
            self.pulled += 1
            yield chunk
        if self._fail_after is not None and self._fail_after >= len(self._chunks):
            raise self._error or ConnectionError("connection reset by peer")

    def close(self) -> None:
        self.closed = True


class _Recorder:
    def __init__(self, stream: Any = None, error: Optional[BaseException] = None):
        self.stream = stream
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.stream


def fake_anthropic_client(stream: Any = None, error: Optional[BaseException] = None) -> SimpleNamespace:
    create = _Recorder(stream, error)
    return SimpleNamespace(messages=SimpleNamespace(create=create), create=create)


def fake_openai_client(stream: Any = None, error: Optional[BaseException] = None) -> SimpleNamespace:
    create = _Recorder(stream, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)), create=create)


class RecordingSink:
    """Trace sink keeping every submitted record."""

    def __init__(self) -> None:
        self.records: list = []

    def submit(self, record) -> None:
        self.records.append(record)


class BrokenSink:
    """Trace sink that always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    def submit(self, record) -> None:
        self.attempts += 1
        raise RuntimeError("sink offline")


def logged_events(records: Iterable[logging.LogRecord]) -> List[Dict[str, Any]]:
    """Decode the JSON payloads of captured ``relay`` log records."""
    out: List[Dict[str, Any]] = []
    for rec in records:
        if not rec.name.startswith("relay"):
            continue
        try:
            payload = json.loads(rec.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict):
            payload["_level"] = rec.levelno
            out.append(payload)
    return out


# ---- chunk builders ----

def anthropic_message_start(input_tokens: int, output_tokens: int = 0, **cache: int) -> Dict[str, Any]:
    usage = {"input_tokens": input_tokens, "output_tokens": output_tokens}
    usage.update(cache)
    return {"type": "message_start", "message": {"id": "msg_1", "usage": usage}}


def anthropic_block_start(text: str, index: int = 0) -> Dict[str, Any]:
    return {"type": "content_block_start", "index": index, "content_block": {"type": "text", "text": text}}


def anthropic_text_delta(text: str, index: int = 0) -> Dict[str, Any]:
    return {"type": "content_block_delta", "index": index, "delta": {"type": "text_delta", "text": text}}


def anthropic_block_stop(index: int = 0) -> Dict[str, Any]:
    return {"type": "content_block_stop", "index": index}


def anthropic_message_delta(output_tokens: int) -> Dict[str, Any]:
    return {"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": output_tokens}}


ANTHROPIC_MESSAGE_STOP = {"type": "message_stop"}


def openai_text_chunk(text: str) -> Dict[str, Any]:
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": {"content": text}}]}


def openai_usage_chunk(prompt_tokens: int, completion_tokens: int, cached_tokens: Optional[int] = None) -> Dict[str, Any]:
    usage: Dict[str, Any] = {"prompt_tokens": prompt_tokens, "completion_tokens": completion_tokens}
    if cached_tokens is not None:
        usage["prompt_tokens_details"] = {"cached_tokens": cached_tokens}
    return {"id": "chatcmpl-1", "choices": [], "usage": usage}

"""OpenAI-compatible request transcoding."""
from __future__ import annotations

from relay_providers.anthropic.request import encode_part as anthropic_part
from relay_providers.base.models import EPHEMERAL, ContentPart, ConversationTurn, ModelDescriptor
from relay_providers.openai.models import OPENAI_SANE_DEFAULTS
from relay_providers.openai.request import encode_part, encode_request


def test_system_prompt_becomes_leading_message():
    req = encode_request("sys", [ConversationTurn.user("hi")], OPENAI_SANE_DEFAULTS)

    assert req.params["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hi"},
    ]
    assert req.params["model"] == "gpt-4o-mini"
    assert req.params["stream"] is True
    assert req.params["temperature"] == 0
    assert req.params["max_tokens"] == 8192
    assert req.headers == {}


def test_stream_options_toggle():
    on = encode_request("s", [], OPENAI_SANE_DEFAULTS)
    off = encode_request("s", [], OPENAI_SANE_DEFAULTS, include_usage=False)

    assert on.params["stream_options"] == {"include_usage": True}
    assert "stream_options" not in off.params


def test_single_text_part_is_flattened_and_images_become_data_urls():
    turn = ConversationTurn.user([ContentPart.of_text("only")])
    mixed = ConversationTurn.user([ContentPart.of_text("look"), ContentPart.of_image("image/jpeg", "abc")])
    req = encode_request("s", [turn, mixed], OPENAI_SANE_DEFAULTS)

    assert req.params["messages"][1] == {"role": "user", "content": "only"}
    assert req.params["messages"][2]["content"] == [
        {"type": "text", "text": "look"},
        {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,abc"}},
    ]


def test_no_directives_for_default_capabilities():
    req = encode_request("s", [ConversationTurn.user("a"), ConversationTurn.user("b")], OPENAI_SANE_DEFAULTS)

    assert all("cache_control" not in str(m) for m in req.params["messages"])


def test_cache_capable_descriptor_forwards_cache_control():
    descriptor = ModelDescriptor(id="gateway-model", supports_cache_hints=True)
    req = encode_request("s", [ConversationTurn.user("a")], descriptor)

    assert req.params["messages"][1]["content"] == [
        {"type": "text", "text": "a", "cache_control": {"type": "ephemeral"}}
    ]


def test_cache_directive_survives_both_transcoders_identically():
    part = ContentPart(type="text", text="x", cache=EPHEMERAL)

    assert encode_part(part)["cache_control"] == anthropic_part(part)["cache_control"] == {"type": "ephemeral"}


def _annotated(messages, offset=0):
    hits = set()
    for i, msg in enumerate(messages[offset:]):
        content = msg["content"]
        if isinstance(content, list):
            hits |= {(i, j) for j, part in enumerate(content) if "cache_control" in part}
    return hits


def test_directive_positions_match_policy_for_both_backends():
    from relay_providers.anthropic.request import encode_request as anthropic_request
    from relay_providers.base.cache_hints import cache_hint_indices

    descriptor = ModelDescriptor(id="m", supports_cache_hints=True)
    turns = [
        ConversationTurn.user([ContentPart.of_text("x"), ContentPart.of_text("y")]),
        ConversationTurn.assistant("ok"),
        ConversationTurn.user("z"),
        ConversationTurn.assistant("ok"),
        ConversationTurn.user([ContentPart.of_image("image/png", "p"), ContentPart.of_text("w")]),
    ]
    expected = {(i, len(turns[i].parts()) - 1) for i in cache_hint_indices(turns)}

    openai_params = encode_request("s", turns, descriptor).params
    anthropic_params = anthropic_request("s", turns, descriptor).params

    assert expected == {(2, 0), (4, 1)}
    assert _annotated(openai_params["messages"], offset=1) == expected
    assert _annotated(anthropic_params["messages"]) == expected

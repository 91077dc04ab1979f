"""relay_providers.config.defaults
===============================

Small, stable default values used across the package. They can be
overridden through environment variables or a config file (see
``relay_providers.config``). Only plain constants live here so every layer
may import this module without creating cycles.
"""

from __future__ import annotations

# ---- Anthropic ----
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
# Beta header value that enables cache_control blocks on Messages requests.
ANTHROPIC_PROMPT_CACHING_BETA = "prompt-caching-2024-07-31"

# ---- OpenAI-compatible ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
AZURE_OPENAI_DEFAULT_API_VERSION = "2024-08-01-preview"

# ---- Request shaping ----
# Used when a model descriptor does not declare an output ceiling.
FALLBACK_MAX_OUTPUT_TOKENS = 8192
DEFAULT_TEMPERATURE = 0

# ---- Transport ----
# Read timeout handed to the pooled httpx client the vendor SDKs use.
HTTP_TIMEOUT_SECONDS = 600.0
HTTP_CONNECT_TIMEOUT_SECONDS = 10.0

# ---- Observability ----
# One of "log", "otel", "none" (see base.tracing.resolve_trace_sink).
DEFAULT_TRACE_SINK = "log"


__all__ = [
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_PROMPT_CACHING_BETA",
    "OPENAI_DEFAULT_MODEL",
    "AZURE_OPENAI_DEFAULT_API_VERSION",
    "FALLBACK_MAX_OUTPUT_TOKENS",
    "DEFAULT_TEMPERATURE",
    "HTTP_TIMEOUT_SECONDS",
    "HTTP_CONNECT_TIMEOUT_SECONDS",
    "DEFAULT_TRACE_SINK",
]

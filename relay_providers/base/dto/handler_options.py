"""Typed configuration consumed by provider adapters.

Purpose
-------
Carry the values a provider adapter needs from the configuration source:
credentials, endpoint, requested model and the usage-reporting toggle. The
adapter never reads the environment itself; ``relay_providers.config``
builds this object.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_copy()``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HandlerOptions(BaseModel):
    """Adapter configuration.

    Attributes
    ----------
    api_key:
        API key for the backend.
    base_url:
        Optional endpoint override (proxies, gateways, Azure resources).
    model_id:
        Requested model id; resolved against the family's model table.
    include_stream_options:
        Ask OpenAI-compatible backends to append a usage chunk to the stream.
        Some compatible servers reject the parameter, hence the toggle.
    azure_api_version:
        API version for Azure OpenAI endpoints.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model_id: Optional[str] = None
    include_stream_options: bool = True
    azure_api_version: Optional[str] = Field(default=None)


__all__ = ["HandlerOptions"]

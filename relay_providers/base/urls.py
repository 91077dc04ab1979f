"""Base URL checks shared by the adapters."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from .errors import ConfigurationError, ErrorCode


def validate_base_url(base_url: Optional[str], provider: str) -> None:
    """Raise :class:`ConfigurationError` unless ``base_url`` is empty or an http(s) URL with a host."""
    if not base_url:
        return
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ConfigurationError(
            code=ErrorCode.CONFIGURATION,
            message=f"malformed base URL {base_url!r}",
            provider=provider,
        )


def is_azure_host(base_url: Optional[str]) -> bool:
    """True for ``azure.com`` and its subdomains (Azure OpenAI resources)."""
    if not base_url:
        return False
    host = (urlparse(base_url).hostname or "").lower()
    return host == "azure.com" or host.endswith(".azure.com")


__all__ = ["is_azure_host", "validate_base_url"]

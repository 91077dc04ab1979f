"""Configuration layer for provider adapters.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional config file pointed to by ``RELAY_CONFIG_FILE`` (JSON or YAML)
3. Environment variables
4. In-code overrides

Environment Variable Conventions
--------------------------------
``<PROVIDER>_API_KEY``, ``<PROVIDER>_BASE_URL``, ``<PROVIDER>_MODEL``,
``<PROVIDER>_INCLUDE_STREAM_OPTIONS``, ``<PROVIDER>_AZURE_API_VERSION``,
e.g. ``ANTHROPIC_API_KEY`` or ``OPENAI_BASE_URL``. A ``.env`` file (path from
``DOTENV_FILE``, default ``.env``) is read once before the environment is
consulted; it never overrides variables that are already set.

Config File
-----------
One section per provider::

    anthropic:
      model: claude-3-5-haiku-20241022
    openai:
      base_url: https://my-resource.openai.azure.com/openai/deployments/gpt4o
      azure_api_version: 2024-08-01-preview

Public API
----------
* ``get_provider_config(provider, overrides=None) -> dict``
* ``load_handler_options(provider, **overrides) -> HandlerOptions``
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import yaml

from ..base.dto import HandlerOptions
from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    AZURE_OPENAI_DEFAULT_API_VERSION,
    OPENAI_DEFAULT_MODEL,
)

CONFIG_FILE_ENV = "RELAY_CONFIG_FILE"
DOTENV_ENV = "DOTENV_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL},
    "openai": {
        "model": OPENAI_DEFAULT_MODEL,
        "include_stream_options": True,
        "azure_api_version": AZURE_OPENAI_DEFAULT_API_VERSION,
    },
}

# config key -> environment variable suffix (prefixed with the provider name)
ENV_FIELD_MAP = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "model": "MODEL",
    "include_stream_options": "INCLUDE_STREAM_OPTIONS",
    "azure_api_version": "AZURE_API_VERSION",
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


class _State:
    file_config: Optional[Dict[str, Any]] = None
    dotenv_applied = False


def _dotenv_pairs(lines: Iterable[str]) -> Iterable[Tuple[str, str]]:
    """Yield ``(key, value)`` from ``KEY=VALUE`` lines; comments are ignored."""
    for raw in lines:
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        yield key, value.strip().strip("'\"")


def _apply_dotenv_once() -> None:
    """Copy dotenv entries into ``os.environ`` without overriding set variables."""
    if _State.dotenv_applied:
        return
    _State.dotenv_applied = True
    path = Path(os.getenv(DOTENV_ENV, ".env"))
    if not path.is_file():
        return
    with path.open("r", encoding="utf-8") as fh:
        for key, value in _dotenv_pairs(fh):
            os.environ.setdefault(key, value)


def _parse_config_text(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        # YAML is a superset of JSON; only reached for YAML-only syntax
        return yaml.safe_load(text)


def _file_config() -> Dict[str, Any]:
    if _State.file_config is None:
        path = os.getenv(CONFIG_FILE_ENV)
        data: Any = None
        if path and Path(path).is_file():
            data = _parse_config_text(Path(path).read_text(encoding="utf-8"))
        _State.file_config = data if isinstance(data, dict) else {}
    return _State.file_config


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (tests, reloads)."""
    _State.file_config = None
    _State.dotenv_applied = False


def parse_bool(value: Any, default: bool = True) -> bool:
    """Interpret ``value`` as a boolean flag; unknown strings yield ``default``."""
    if isinstance(value, bool):
        return value
    text = "" if value is None else str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    return default


def _env_layer(provider: str) -> Dict[str, str]:
    prefix = provider.upper()
    found = {key: os.getenv(f"{prefix}_{suffix}") for key, suffix in ENV_FIELD_MAP.items()}
    return {key: val.strip() for key, val in found.items() if val is not None and val.strip()}


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for ``provider``.

    Layers, later wins: defaults, config file section, environment,
    ``overrides`` (``None`` values in ``overrides`` are ignored).
    """
    _apply_dotenv_once()
    name = (provider or "").strip().lower()
    section = _file_config().get(name)
    layers = (
        DEFAULTS.get(name, {}),
        section if isinstance(section, dict) else {},
        _env_layer(name),
        {k: v for k, v in (overrides or {}).items() if v is not None},
    )
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def load_handler_options(provider: str, **overrides: Any) -> HandlerOptions:
    """Build :class:`HandlerOptions` for ``provider`` from merged configuration."""
    cfg = get_provider_config(provider, overrides)
    return HandlerOptions(
        api_key=cfg.get("api_key"),
        base_url=cfg.get("base_url"),
        model_id=cfg.get("model_id") or cfg.get("model"),
        include_stream_options=parse_bool(cfg.get("include_stream_options"), default=True),
        azure_api_version=cfg.get("azure_api_version"),
    )


def get_model(provider: str) -> Optional[str]:
    """Configured model id for ``provider`` (before resolution)."""
    return get_provider_config(provider).get("model")


__all__ = [
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "get_model",
    "get_provider_config",
    "load_handler_options",
    "parse_bool",
    "reset_config_cache",
]

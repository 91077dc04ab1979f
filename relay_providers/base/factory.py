"""Provider factory.

Creates adapters by canonical backend-family name. Adapter modules are
imported lazily with ``importlib`` so that importing the factory does not
pull in either SDK.

When no :class:`HandlerOptions` are passed, options are assembled from the
configuration layer (defaults, config file, environment) with any
``HandlerOptions`` field given as a keyword argument taking precedence.
The factory performs no retries or fallbacks; it returns an adapter or
raises :class:`UnknownProviderError`.
"""

from __future__ import annotations

import inspect
from importlib import import_module
from typing import Any, Dict, Optional, Tuple, Type

from .dto import HandlerOptions


class UnknownProviderError(Exception):
    """Raised when a provider name is unknown or its adapter cannot be built."""


_OPTION_FIELDS = frozenset(HandlerOptions.model_fields)


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters from a canonical name (``"anthropic"``, ``"openai"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "anthropic": {"module": "relay_providers.anthropic.client", "class": "AnthropicProvider"},
        "openai": {"module": "relay_providers.openai.client", "class": "OpenAIProvider"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        options: Optional[HandlerOptions] = None,
        **kwargs: Any,
    ) -> Any:
        """Create an adapter instance.

        Parameters
        ----------
        provider:
            Canonical backend-family name.
        options:
            Explicit handler options. When omitted they are loaded through
            ``config.load_handler_options`` using any ``HandlerOptions``
            fields found in ``kwargs`` as overrides.
        **kwargs:
            Remaining adapter constructor arguments (``client``,
            ``trace_sink``, ``resolver``).

        Raises
        ------
        UnknownProviderError
            If the name is unknown, the adapter module cannot be imported or
            the constructor signature rejects its arguments. Errors raised
            while the adapter is being built propagate unchanged.
        """
        name = (provider or "").strip().lower()
        klass = cls._adapter_class(name, provider)

        ctor_kwargs = {k: v for k, v in kwargs.items() if k not in _OPTION_FIELDS}
        if options is None:
            from ..config import load_handler_options

            overrides = {k: v for k, v in kwargs.items() if k in _OPTION_FIELDS}
            options = load_handler_options(name, **overrides)

        try:
            inspect.signature(klass).bind(options, **ctor_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(f"{provider!r} adapter rejected its arguments: {exc}") from exc
        return klass(options, **ctor_kwargs)

    @classmethod
    def _adapter_class(cls, name: str, requested: str) -> Type:
        """Import the adapter module for ``name`` and return its class."""
        entry = cls._PROVIDERS.get(name)
        if entry is None:
            raise UnknownProviderError(f"Unknown provider {requested!r}; expected one of {', '.join(cls.supported())}")
        try:
            module = import_module(entry["module"])
        except ImportError as exc:  # pragma: no cover - missing SDK
            raise UnknownProviderError(f"Cannot import {entry['module']} for {requested!r}: {exc}") from exc
        klass = getattr(module, entry["class"], None)
        if klass is None:
            raise UnknownProviderError(f"{entry['module']} has no adapter class {entry['class']!r}")
        return klass

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical provider names in registration order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]

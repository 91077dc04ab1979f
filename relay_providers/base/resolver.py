"""Model resolution.

``ModelResolver.resolve`` never fails: a caller must always be able to get a
usable descriptor for display and request building, so unknown or missing
ids degrade to the family default.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .models import ModelDescriptor


class ModelResolver:
    """Resolve requested model ids against one backend family's table.

    Parameters:
        models: Known descriptors keyed by id.
        default_id: Id returned when the request cannot be matched; must be
            present in ``models``.
        open_catalog: Accept ids missing from ``models`` (for endpoints that
            serve arbitrary models). Such ids are paired with ``fallback``
            capabilities.
        fallback: Capabilities used for open-catalog ids; defaults to the
            default descriptor.
    """

    def __init__(
        self,
        models: Mapping[str, ModelDescriptor],
        default_id: str,
        *,
        open_catalog: bool = False,
        fallback: Optional[ModelDescriptor] = None,
    ) -> None:
        if default_id not in models:
            raise ValueError(f"default model '{default_id}' missing from model table")
        self._models = MappingProxyType(dict(models))
        self._default_id = default_id
        self._open_catalog = open_catalog
        self._fallback = fallback or models[default_id]

    @property
    def models(self) -> Mapping[str, ModelDescriptor]:
        return self._models

    @property
    def default_id(self) -> str:
        return self._default_id

    def resolve(self, requested_id: Optional[str] = None) -> ModelDescriptor:
        model_id = (requested_id or "").strip()
        if model_id and model_id in self._models:
            return self._models[model_id]
        if model_id and self._open_catalog:
            return self._fallback.with_id(model_id)
        return self._models[self._default_id]


__all__ = ["ModelResolver"]

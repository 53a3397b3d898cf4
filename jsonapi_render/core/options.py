"""Merge request selection directives with caller overrides and defaults."""

from __future__ import annotations

from typing import Any

from jsonapi_render.config import JSONAPISettings
from jsonapi_render.core.terms import resolve_terms
from jsonapi_render.schemas.options import (
    RequestSelection,
    SelectionOptions,
    SelectionOverrides,
)


def _pick(override: Any, requested: Any) -> Any:
    """An override that was set, even to an empty value, beats the request."""
    return requested if override is None else override


class SelectionOptionsBuilder:
    """Build the final ``SelectionOptions`` for one serializer call."""

    def __init__(self, settings: JSONAPISettings) -> None:
        self.settings = settings

    def default_jsonapi(self) -> dict[str, Any] | None:
        if not self.settings.jsonapi_version:
            return None
        return {"version": self.settings.jsonapi_version}

    def build(
        self,
        request: RequestSelection | None = None,
        overrides: SelectionOverrides | None = None,
        *,
        is_collection: bool = False,
    ) -> SelectionOptions:
        """Return options where request values only fill what the caller left unset."""
        request = request or RequestSelection()
        overrides = overrides or SelectionOverrides()

        include = _pick(overrides.include, request.include)
        exclude = _pick(overrides.exclude, request.exclude)
        fields = _pick(overrides.fields, request.fields)

        if include and exclude:
            include = resolve_terms(include, exclude)

        jsonapi = overrides.jsonapi if overrides.jsonapi is not None else self.default_jsonapi()
        return SelectionOptions(
            include=include or None,
            fields=fields or {},
            is_collection=is_collection,
            meta=overrides.meta,
            jsonapi=jsonapi,
        )

"""Helpers for JSON:API query parameter parsing."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from jsonapi_render.schemas.options import RequestSelection


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def _multi_items(params: Mapping[str, Any]) -> Iterable[tuple[str, Any]]:
    """Yield every ``(key, value)`` pair, repeated keys included."""
    if hasattr(params, "multi_items"):
        yield from params.multi_items()
        return
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, item
        else:
            yield key, value


def parse_query_params(params: Mapping[str, Any]) -> RequestSelection:
    """Collect ``include``, ``exclude`` and ``fields[type]`` from query parameters.

    ``include`` and ``exclude`` may be comma-delimited, repeated, or both.
    Other parameter families (sort, page, filter) are left to the caller.
    """
    include: list[str] = []
    exclude: list[str] = []
    fields: dict[str, list[str]] = {}

    for key, value in _multi_items(params):
        if value is None:
            continue
        raw_value = str(value)
        if key == "include":
            include.extend(_split_csv(raw_value))
        elif key == "exclude":
            exclude.extend(_split_csv(raw_value))
        elif key.startswith("fields[") and key.endswith("]"):
            resource_type = key[len("fields[") : -1]
            fields.setdefault(resource_type, []).extend(_split_csv(raw_value))

    return RequestSelection(include=include, exclude=exclude, fields=fields)

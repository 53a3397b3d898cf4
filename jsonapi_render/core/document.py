"""JSON:API document construction and rendering."""

import json
from typing import Any, Iterable, Literal, Mapping

from jsonapi_render.core.errors import UnserializableOutput


class NoContent:
    """Outcome telling the boundary to answer 204 with no body."""

    _instance: "NoContent | None" = None

    def __new__(cls) -> "NoContent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CONTENT"

    def __bool__(self) -> bool:
        return False


NO_CONTENT = NoContent()


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.0 documents from serialized data."""

    def _finish(
        self,
        document: dict[str, Any],
        included: Iterable[Mapping[str, Any]] | None,
        meta: Mapping[str, Any] | None,
        jsonapi: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        if included:
            document["included"] = [dict(item) for item in included]
        if meta is not None:
            document["meta"] = dict(meta)
        if jsonapi:
            document["jsonapi"] = dict(jsonapi)
        return document

    def build_single(
        self,
        resource: Mapping[str, Any] | None,
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        meta: Mapping[str, Any] | None = None,
        jsonapi: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a document for a single resource object, or ``data: null``."""
        document: dict[str, Any] = {"data": None if resource is None else dict(resource)}
        return self._finish(document, included, meta, jsonapi)

    def build_collection(
        self,
        resources: Iterable[Mapping[str, Any]],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        meta: Mapping[str, Any] | None = None,
        jsonapi: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a document for a collection of resources."""
        document: dict[str, Any] = {"data": [dict(item) for item in resources]}
        return self._finish(document, included, meta, jsonapi)

    def build_linkage(
        self,
        linkage: Any,
        *,
        meta: Mapping[str, Any] | None = None,
        jsonapi: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a linkage-only document (resource identifiers, no attributes)."""
        return self._finish({"data": linkage}, None, meta, jsonapi)


def render_document(
    document: Any, generator: Literal["compact", "pretty"] = "compact"
) -> bytes:
    """Render a document to UTF-8 JSON, refusing values JSON cannot represent."""
    try:
        if generator == "pretty":
            text = json.dumps(document, ensure_ascii=False, allow_nan=False, indent=2)
        else:
            text = json.dumps(
                document, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
    except (TypeError, ValueError) as exc:
        raise UnserializableOutput() from exc
    return text.encode("utf-8")

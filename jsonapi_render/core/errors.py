"""JSON:API error objects and the exceptions raised at the serialization boundary."""

import uuid
from typing import Any


class JSONAPIError(Exception):
    """Base for failures that map to a fixed error response."""

    status_code: int = 400
    detail: str = "Bad Request"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class MalformedInput(JSONAPIError):
    """The request body could not be parsed."""

    detail = "Malformed JSON in the request body"


class UnserializableOutput(JSONAPIError):
    """The response document could not be rendered to JSON."""

    detail = "Unserializable entities in the response body"


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        title: str | None = None,
        detail: str | None = None,
        status: int | str | None = None,
        source: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return an error object with a fresh id and only the non-empty members."""
        error: dict[str, Any] = {"id": str(uuid.uuid4())}
        if title:
            error["title"] = title
        if detail:
            error["detail"] = detail
        if status:
            error["status"] = str(status)
        if source:
            error["source"] = source
        return error

    def error_document(self, errors: list[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": errors}

"""Starlette responses carrying JSON:API documents."""

from typing import Any, Literal, Mapping

from starlette.background import BackgroundTask
from starlette.responses import JSONResponse, Response

from jsonapi_render.core.document import NoContent, render_document

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class JSONAPIResponse(JSONResponse):
    """JSON response using the JSON:API media type and a configurable generator."""

    media_type = JSONAPI_MEDIA_TYPE

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        background: BackgroundTask | None = None,
        *,
        generator: Literal["compact", "pretty"] = "compact",
    ) -> None:
        self.generator = generator
        super().__init__(content, status_code=status_code, headers=headers, background=background)

    def render(self, content: Any) -> bytes:
        return render_document(content, self.generator)


def document_response(
    document: dict[str, Any] | NoContent,
    *,
    status_code: int = 200,
    generator: Literal["compact", "pretty"] = "compact",
) -> Response:
    """Return a 204 for ``NO_CONTENT``, otherwise the rendered document."""
    if isinstance(document, NoContent):
        return Response(status_code=204)
    return JSONAPIResponse(document, status_code=status_code, generator=generator)

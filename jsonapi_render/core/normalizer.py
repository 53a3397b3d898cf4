"""Reduce any failed response state to one canonical JSON:API error object."""

from __future__ import annotations

import logging
from typing import Any

from jsonapi_render.config import JSONAPISettings
from jsonapi_render.core.errors import JSONAPIErrorBuilder
from jsonapi_render.schemas.context import (
    EmptyBody,
    PlainDetailList,
    RawText,
    ResponseBody,
    ResponseContext,
    StructuredError,
)

NOT_FOUND_TITLE = "Not Found"
UNKNOWN_ERROR_TITLE = "Unknown Error"


def first_detail(body: ResponseBody) -> str | None:
    """Return the leading detail string of a plain body, if any."""
    if isinstance(body, PlainDetailList):
        return body.details[0] if body.details else None
    if isinstance(body, RawText):
        return body.text or None
    if isinstance(body, (StructuredError, EmptyBody)):
        return None
    raise TypeError(f"Unknown response body shape: {type(body).__name__}")


class ErrorNormalizer:
    """Turn a ``ResponseContext`` into a logged, enveloped error document."""

    def __init__(
        self,
        settings: JSONAPISettings,
        *,
        error_builder: JSONAPIErrorBuilder | None = None,
    ) -> None:
        self.settings = settings
        self.error_builder = error_builder or JSONAPIErrorBuilder()
        self.logger = logging.getLogger(settings.logger_progname)

    def normalized_error(self, context: ResponseContext) -> dict[str, Any]:
        """Return ``title``/``detail``/``source`` for the failure in ``context``.

        Branches, first match wins:

        - a structured body is already normalized and passes through;
        - 404 with a body: title "Not Found", the generic placeholder is dropped;
        - a captured exception: title "Unknown Error", its message as detail;
        - otherwise the first plain detail, untitled.
        """
        body = context.body
        if isinstance(body, StructuredError):
            return {
                key: body.error.get(key) for key in ("title", "detail", "source")
            }

        detail = first_detail(body)
        if context.status == 404 and detail:
            if detail == self.settings.not_found_placeholder:
                detail = None
            return {"title": NOT_FOUND_TITLE, "detail": detail}
        if context.error is not None:
            return {"title": UNKNOWN_ERROR_TITLE, "detail": str(context.error)}
        return {"title": None, "detail": detail}

    def error_object(self, context: ResponseContext) -> dict[str, Any]:
        """Return the error object with a fresh id and no empty members."""
        return self.error_builder.error_object(
            status=context.status, **self.normalized_error(context)
        )

    def serialized_error(self, context: ResponseContext) -> dict[str, Any]:
        """Log the normalized error and wrap it in an errors envelope."""
        error = self.error_object(context)
        try:
            self.logger.error("%s", error, extra={"error_id": error["id"]})
        except Exception:  # noqa: BLE001 - the error response is still sent
            pass
        return self.error_builder.error_document([error])

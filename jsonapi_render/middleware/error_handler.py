"""JSON:API error boundary: exception handlers and a catch-all ASGI middleware."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jsonapi_render.config import get_settings
from jsonapi_render.core.errors import JSONAPIError
from jsonapi_render.core.normalizer import ErrorNormalizer
from jsonapi_render.responses import JSONAPIResponse
from jsonapi_render.schemas.context import PlainDetailList, ResponseContext, body_from

logger = logging.getLogger(__name__)


def error_response(
    normalizer: ErrorNormalizer,
    context: ResponseContext,
    headers: dict[str, str] | None = None,
) -> JSONAPIResponse:
    """Normalize ``context`` and render it with the error generator."""
    return JSONAPIResponse(
        normalizer.serialized_error(context),
        status_code=context.status or 500,
        headers=headers,
        generator=normalizer.settings.json_error_generator,
    )


def register_error_handlers(app: FastAPI, normalizer: ErrorNormalizer) -> None:
    """Register JSON:API error handlers on the FastAPI app."""
    _register_jsonapi_error_handler(app, normalizer)
    _register_http_error_handler(app, normalizer)
    _register_validation_error_handler(app, normalizer)


def _register_jsonapi_error_handler(app: FastAPI, normalizer: ErrorNormalizer) -> None:
    """Register the fixed-message handler for malformed input and unserializable output."""

    @app.exception_handler(JSONAPIError)
    async def jsonapi_error_handler(request: Request, exc: JSONAPIError) -> JSONAPIResponse:
        logger.warning("%s on %s", exc.detail, request.url.path)
        error = normalizer.error_builder.error_object(
            status=exc.status_code, detail=exc.detail
        )
        return JSONAPIResponse(
            normalizer.error_builder.error_document([error]),
            status_code=exc.status_code,
            generator=normalizer.settings.json_error_generator,
        )


def _register_http_error_handler(app: FastAPI, normalizer: ErrorNormalizer) -> None:
    """Register the handler for HTTP exceptions raised by routes and routing."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONAPIResponse:
        context = ResponseContext(status=exc.status_code, body=body_from(exc.detail))
        return error_response(normalizer, context, headers=getattr(exc, "headers", None))


def _register_validation_error_handler(app: FastAPI, normalizer: ErrorNormalizer) -> None:
    """Register the request validation handler; answers with status 400."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONAPIResponse:
        details = [
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        context = ResponseContext(status=400, body=PlainDetailList(details=details))
        return error_response(normalizer, context)


class ErrorHandlerMiddleware:
    """Convert uncaught exceptions into normalized JSON:API error documents."""

    def __init__(self, app: Any, normalizer: ErrorNormalizer | None = None) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.normalizer = normalizer or ErrorNormalizer(get_settings())

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Capture exceptions raised downstream and answer with status 500."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                raise
            logger.exception("Unhandled exception on %s", scope.get("path"))
            response = error_response(
                self.normalizer, ResponseContext(status=500, error=exc)
            )
            await response(scope, receive, send)

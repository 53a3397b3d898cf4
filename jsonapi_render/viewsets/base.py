"""Request-bound serialization helpers for JSON:API endpoints."""

from typing import Any, Iterable

from fastapi import Request
from starlette.responses import Response

from jsonapi_render.config import JSONAPISettings
from jsonapi_render.core.document import NoContent
from jsonapi_render.core.options import SelectionOptionsBuilder
from jsonapi_render.responses import document_response
from jsonapi_render.schemas.options import RequestSelection, SelectionOptions, SelectionOverrides
from jsonapi_render.serializers.engine import SerializationEngine
from jsonapi_render.utils.query_params import parse_query_params
from jsonapi_render.utils.request_body import decode_request_body


class JSONAPIViewSet:
    """Base class giving endpoints access to the serialization engine.

    Keyword ``overrides`` accepted by the ``serialize_*`` helpers are the
    fields of ``SelectionOverrides`` (``include``, ``exclude``, ``fields``,
    ``meta``, ``jsonapi``); any other key is rejected.
    """

    options_builder_class: type = SelectionOptionsBuilder

    def __init__(self, engine: SerializationEngine) -> None:
        self.engine = engine
        self.options_builder = self.options_builder_class(engine.settings)

    @property
    def settings(self) -> JSONAPISettings:
        return self.engine.settings

    def get_query_params(self, request: Request) -> RequestSelection:
        """Parse the selection directives of the query string."""
        return parse_query_params(request.query_params)

    async def deserialized_request_body(self, request: Request) -> dict[str, Any]:
        """Return the decoded JSON body; raises ``MalformedInput`` when it does not parse."""
        return decode_request_body(await request.body())

    def get_options(
        self, request: Request, *, is_collection: bool, **overrides: Any
    ) -> SelectionOptions:
        return self.options_builder.build(
            self.get_query_params(request),
            SelectionOverrides(**overrides),
            is_collection=is_collection,
        )

    def render(self, document: dict[str, Any] | NoContent, status_code: int = 200) -> Response:
        return document_response(
            document, status_code=status_code, generator=self.settings.json_generator
        )

    def serialize_model(
        self, request: Request, model: Any | None = None, **overrides: Any
    ) -> dict[str, Any]:
        options = self.get_options(request, is_collection=False, **overrides)
        return self.engine.serialize_model(model, options)

    def serialize_model_response(
        self, request: Request, model: Any | None = None, **overrides: Any
    ) -> Response:
        """Respond with the resource, a meta-only document, or 204."""
        options = self.get_options(request, is_collection=False, **overrides)
        return self.render(self.engine.serialize_model_or_empty(model, options))

    def serialize_models(
        self, request: Request, models: Iterable[Any] | None = None, **overrides: Any
    ) -> dict[str, Any]:
        options = self.get_options(request, is_collection=True, **overrides)
        return self.engine.serialize_models(models, options)

    def serialize_models_response(
        self, request: Request, models: Iterable[Any] | None = None, **overrides: Any
    ) -> Response:
        """Respond with the collection, a meta-only document, or 204."""
        options = self.get_options(request, is_collection=True, **overrides)
        return self.render(self.engine.serialize_models_or_empty(models, options))

    def serialize_linkage(
        self, request: Request, resource: Any, relationship: str, **overrides: Any
    ) -> dict[str, Any]:
        options = self.get_options(request, is_collection=False, **overrides)
        return self.engine.serialize_linkage(resource, relationship, options)

    def serialize_linkage_response(
        self,
        request: Request,
        resource: Any,
        relationship: str,
        updated: bool = False,
        **overrides: Any,
    ) -> Response:
        """Respond to a to-one relationship update."""
        options = self.get_options(request, is_collection=False, **overrides)
        return self.render(
            self.engine.serialize_linkage_if_updated(updated, resource, relationship, options)
        )

    def serialize_linkages_response(
        self,
        request: Request,
        resource: Any,
        relationship: str,
        updated: bool = False,
        **overrides: Any,
    ) -> Response:
        """Respond to a to-many relationship update."""
        options = self.get_options(request, is_collection=True, **overrides)
        return self.render(
            self.engine.serialize_linkage_if_updated(
                updated, resource, relationship, options, singular=False
            )
        )

"""Turn entities and selection options into JSON:API documents."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from jsonapi_render.config import JSONAPISettings, get_settings
from jsonapi_render.core.document import NO_CONTENT, JSONAPIDocumentBuilder, NoContent
from jsonapi_render.schemas.options import SelectionOptions
from jsonapi_render.serializers.registry import SerializerRegistry

logger = logging.getLogger(__name__)


class SerializationEngine:
    """Pure, synchronous document serializer.

    Holds only the frozen settings and registry (the registry is frozen on
    construction); every method is a function of its arguments, so one engine
    can serve concurrent requests.
    """

    document_builder_class: type = JSONAPIDocumentBuilder

    def __init__(
        self,
        registry: SerializerRegistry | None = None,
        settings: JSONAPISettings | None = None,
    ) -> None:
        self.registry = registry or SerializerRegistry()
        self.registry.freeze()
        self.settings = settings or get_settings()
        self.document_builder = self.document_builder_class()

    def serialize_model(
        self, entity: Any | None, options: SelectionOptions
    ) -> dict[str, Any]:
        """Document with a single resource (or ``data: null``) as primary data."""
        if options.is_collection:
            options = options.model_copy(update={"is_collection": False})
        return self._serialize(entity, options)

    def serialize_model_or_empty(
        self, entity: Any | None, options: SelectionOptions
    ) -> dict[str, Any] | NoContent:
        """Like ``serialize_model`` but ``NO_CONTENT`` when there is nothing to say."""
        if entity is not None:
            return self.serialize_model(entity, options)
        if options.meta is not None:
            return self.serialize_model(None, options.meta_only(is_collection=False))
        return NO_CONTENT

    def serialize_models(
        self, entities: Iterable[Any] | None, options: SelectionOptions
    ) -> dict[str, Any]:
        """Document whose primary data is always a list."""
        if not options.is_collection:
            options = options.model_copy(update={"is_collection": True})
        return self._serialize(list(entities or []), options)

    def serialize_models_or_empty(
        self, entities: Iterable[Any] | None, options: SelectionOptions
    ) -> dict[str, Any] | NoContent:
        """An empty collection without ``meta`` is ``NO_CONTENT``, same as an absent entity."""
        entities = list(entities or [])
        if entities:
            return self.serialize_models(entities, options)
        if options.meta is not None:
            return self.serialize_models([], options.meta_only(is_collection=True))
        return NO_CONTENT

    def serialize_linkage(
        self, resource: Any, relationship: str, options: SelectionOptions
    ) -> dict[str, Any]:
        """Linkage-only document for the current state of ``resource.relationship``."""
        serializer = self.registry.serializer_for(resource)
        return self.document_builder.build_linkage(
            serializer.relationship_data(resource, relationship),
            meta=options.meta,
            jsonapi=options.jsonapi,
        )

    def serialize_linkage_if_updated(
        self,
        updated: bool,
        resource: Any,
        relationship: str,
        options: SelectionOptions,
        *,
        singular: bool = True,
    ) -> dict[str, Any] | NoContent:
        """New linkage when the relationship changed, the empty outcome otherwise."""
        if updated:
            return self.serialize_linkage(resource, relationship, options)
        if singular:
            return self.serialize_model_or_empty(None, options)
        return self.serialize_models_or_empty([], options)

    def to_resource(self, instance: Any, options: SelectionOptions) -> dict[str, Any]:
        serializer = self.registry.serializer_for(instance)
        return serializer.to_resource(
            instance,
            fields=options.fields.get(serializer.get_type(instance)),
            base_url=self.settings.base_url,
        )

    def build_included(
        self, primary: list[Any], options: SelectionOptions
    ) -> list[dict[str, Any]]:
        """Walk each include term over the relationship graph of ``primary``.

        A term ``a.b`` includes everything reached through ``a`` and then
        through ``b``. Primary resources and repeated ``(type, id)`` pairs
        are never included twice.
        """
        seen = {self._key(self.registry.serializer_for(item), item) for item in primary}
        included: list[dict[str, Any]] = []

        for term in sorted(options.include or ()):
            current = primary
            for relationship in (part for part in term.split(".") if part):
                reached: list[Any] = []
                for instance in current:
                    serializer = self.registry.serializer_for(instance)
                    reached.extend(serializer.get_related(instance, relationship))
                for instance in reached:
                    key = self._key(self.registry.serializer_for(instance), instance)
                    if key in seen:
                        continue
                    seen.add(key)
                    included.append(self.to_resource(instance, options))
                current = reached
                if not current:
                    logger.debug("Include term %r stops at %r", term, relationship)
                    break
        return included

    def _key(self, serializer: Any, instance: Any) -> tuple[str, str]:
        return serializer.get_type(instance), serializer.get_id(instance)

    def _serialize(self, data: Any, options: SelectionOptions) -> dict[str, Any]:
        if options.is_collection:
            primary = list(data)
        else:
            primary = [] if data is None else [data]
        resources = [self.to_resource(item, options) for item in primary]
        included = self.build_included(primary, options) if options.include else None

        if options.is_collection:
            return self.document_builder.build_collection(
                resources, included=included, meta=options.meta, jsonapi=options.jsonapi
            )
        return self.document_builder.build_single(
            resources[0] if resources else None,
            included=included,
            meta=options.meta,
            jsonapi=options.jsonapi,
        )

"""Base serializer for JSON:API resource objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from sqlalchemy.inspection import inspect
from sqlalchemy.orm.attributes import NO_VALUE

if TYPE_CHECKING:
    from jsonapi_render.serializers.registry import SerializerRegistry


def default_type(instance: Any) -> str:
    """Type tag for objects without a registered serializer."""
    return getattr(instance, "__tablename__", instance.__class__.__name__.lower())


class JSONAPISerializer:
    """Serialize plain objects or SQLAlchemy models into JSON:API resource objects."""

    class Meta:
        """Serializer metadata (type, model, fields, relationships)."""

        type_: str = ""
        model: Any = None
        fields: list[str] = []
        relationships: list[str] = []

    def __init__(self, registry: SerializerRegistry | None = None) -> None:
        self.registry = registry

    def _meta(self, name: str, default: Any = None) -> Any:
        return getattr(self.Meta, name, default)

    def get_type(self, instance: Any) -> str:
        return self._meta("type_", "") or default_type(instance)

    def get_id(self, instance: Any) -> str:
        """Return the resource id as a string."""
        value = getattr(instance, "id", None)
        return "" if value is None else str(value)

    def identifier(self, instance: Any) -> dict[str, str]:
        return {"type": self.get_type(instance), "id": self.get_id(instance)}

    def to_resource(
        self,
        instance: Any,
        *,
        fields: Iterable[str] | None = None,
        base_url: str | None = None,
    ) -> dict[str, Any]:
        """Serialize an instance; ``fields`` narrows attributes and relationships."""
        allowed = None if fields is None else set(fields)
        resource: dict[str, Any] = self.identifier(instance)
        attributes = self.get_attributes(instance, fields=allowed)
        relationships = self.get_relationships(instance, fields=allowed, base_url=base_url)
        if attributes:
            resource["attributes"] = attributes
        if relationships:
            resource["relationships"] = relationships
        if base_url:
            resource["links"] = {"self": self._resource_url(base_url, instance)}
        return resource

    def get_attributes(
        self, instance: Any, *, fields: set[str] | None = None
    ) -> dict[str, Any]:
        """Return attributes derived from serializer fields, mapped columns or ``__dict__``."""
        names = self.attribute_names(instance)
        if fields is not None:
            names = [name for name in names if name in fields]
        return {name: getattr(instance, name) for name in names}

    def attribute_names(self, instance: Any) -> list[str]:
        if self._meta("fields"):
            return [field for field in self._meta("fields") if field != "id"]
        related = set(self.relationship_names(instance))
        mapper = inspect(instance.__class__, raiseerr=False)
        if mapper is not None:
            return [
                attr.key
                for attr in mapper.column_attrs
                if attr.key != "id" and attr.key not in related and self._loaded(instance, attr.key)
            ]
        if hasattr(instance, "__dict__"):
            return [
                key
                for key in instance.__dict__
                if not key.startswith("_") and key != "id" and key not in related
            ]
        return []

    def relationship_names(self, instance: Any) -> list[str]:
        if self._meta("relationships"):
            return list(self._meta("relationships"))
        mapper = inspect(instance.__class__, raiseerr=False)
        if mapper is None:
            return []
        return [relationship.key for relationship in mapper.relationships]

    def has_relationship(self, instance: Any, name: str) -> bool:
        return name in self.relationship_names(instance)

    def is_to_many(self, instance: Any, name: str) -> bool:
        mapper = inspect(instance.__class__, raiseerr=False)
        if mapper is not None and name in mapper.relationships:
            return bool(mapper.relationships[name].uselist)
        return isinstance(getattr(instance, name, None), (list, tuple, set, frozenset))

    def is_loaded(self, instance: Any, name: str) -> bool:
        """False when reading the relationship would need a trip to the database."""
        if not hasattr(instance, "__dict__"):
            return hasattr(instance, name)
        mapper = inspect(instance.__class__, raiseerr=False)
        if mapper is not None:
            return self._loaded(instance, name)
        return name in instance.__dict__ or hasattr(type(instance), name)

    def _loaded(self, instance: Any, key: str) -> bool:
        state = inspect(instance, raiseerr=False)
        if state is None or key not in state.attrs:
            return False
        return state.attrs[key].loaded_value is not NO_VALUE

    def get_related(self, instance: Any, name: str) -> list[Any]:
        """Return related instances as a list; empty when unset or unloaded."""
        if not self.has_relationship(instance, name) or not self.is_loaded(instance, name):
            return []
        related = getattr(instance, name, None)
        if related is None:
            return []
        if self.is_to_many(instance, name):
            return list(related)
        return [related]

    def relationship_data(self, instance: Any, name: str) -> Any:
        """Return resource linkage for one relationship."""
        related = self.get_related(instance, name)
        if self.is_to_many(instance, name):
            return [self._identifier(item) for item in related]
        return self._identifier(related[0]) if related else None

    def get_relationships(
        self,
        instance: Any,
        *,
        fields: set[str] | None = None,
        base_url: str | None = None,
    ) -> dict[str, Any]:
        """Return relationship objects; unloaded ones only carry links."""
        relationships: dict[str, Any] = {}
        for name in self.relationship_names(instance):
            if fields is not None and name not in fields:
                continue
            relationship: dict[str, Any] = {}
            if base_url:
                relationship["links"] = self._relationship_links(base_url, instance, name)
            if self.is_loaded(instance, name):
                relationship["data"] = self.relationship_data(instance, name)
            if relationship:
                relationships[name] = relationship
        return relationships

    def _identifier(self, related: Any) -> dict[str, str]:
        if self.registry is not None:
            return self.registry.serializer_for(related).identifier(related)
        return {"type": default_type(related), "id": self.get_id(related)}

    def _resource_url(self, base_url: str, instance: Any) -> str:
        base = base_url.rstrip("/")
        return f"{base}/{self.get_type(instance)}/{self.get_id(instance)}"

    def _relationship_links(
        self, base_url: str, instance: Any, relationship: str
    ) -> dict[str, str]:
        resource_path = self._resource_url(base_url, instance)
        return {
            "self": f"{resource_path}/relationships/{relationship}",
            "related": f"{resource_path}/{relationship}",
        }

"""Selection values consumed by the serialization engine."""

from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jsonapi_render.core.terms import parse_terms


def _normalize_fields(value: Any) -> Dict[str, FrozenSet[str]]:
    if not value:
        return {}
    return {str(type_): parse_terms(names) for type_, names in dict(value).items()}


def _read_only(value: Optional[Mapping[str, FrozenSet[str]]]) -> Any:
    return None if value is None else MappingProxyType(dict(value))


def _empty_fields() -> Mapping[str, FrozenSet[str]]:
    return MappingProxyType({})


class RequestSelection(BaseModel):
    """Selection directives parsed from the query string."""

    model_config = ConfigDict(frozen=True)

    include: FrozenSet[str] = frozenset()
    exclude: FrozenSet[str] = frozenset()
    fields: Mapping[str, FrozenSet[str]] = Field(default_factory=_empty_fields)

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _terms(cls, value: Any) -> FrozenSet[str]:
        return parse_terms(value)

    @field_validator("fields", mode="before")
    @classmethod
    def _fields(cls, value: Any) -> Dict[str, FrozenSet[str]]:
        return _normalize_fields(value)

    @field_validator("fields", mode="after")
    @classmethod
    def _freeze_fields(cls, value: Mapping[str, FrozenSet[str]]) -> Any:
        return _read_only(value)


class SelectionOverrides(BaseModel):
    """Programmatic options a caller passes alongside an entity."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    include: Optional[FrozenSet[str]] = None
    exclude: Optional[FrozenSet[str]] = None
    fields: Optional[Mapping[str, FrozenSet[str]]] = None
    meta: Optional[Dict[str, Any]] = None
    jsonapi: Optional[Dict[str, Any]] = None

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _terms(cls, value: Any) -> Optional[FrozenSet[str]]:
        return None if value is None else parse_terms(value)

    @field_validator("fields", mode="before")
    @classmethod
    def _fields(cls, value: Any) -> Optional[Dict[str, FrozenSet[str]]]:
        return None if value is None else _normalize_fields(value)

    @field_validator("fields", mode="after")
    @classmethod
    def _freeze_fields(cls, value: Optional[Mapping[str, FrozenSet[str]]]) -> Any:
        return _read_only(value)


class SelectionOptions(BaseModel):
    """Final, per-request options handed to the serializer.

    ``fields`` is exposed as a read-only mapping.
    """

    model_config = ConfigDict(frozen=True)

    include: Optional[FrozenSet[str]] = None
    fields: Mapping[str, FrozenSet[str]] = Field(default_factory=_empty_fields)
    is_collection: bool = False
    meta: Optional[Dict[str, Any]] = None
    jsonapi: Optional[Dict[str, Any]] = None

    @field_validator("fields", mode="before")
    @classmethod
    def _fields(cls, value: Any) -> Dict[str, FrozenSet[str]]:
        return _normalize_fields(value)

    @field_validator("fields", mode="after")
    @classmethod
    def _freeze_fields(cls, value: Mapping[str, FrozenSet[str]]) -> Any:
        return _read_only(value)

    def meta_only(self, *, is_collection: bool) -> "SelectionOptions":
        """Return options that keep only the metadata blocks."""
        return SelectionOptions(
            is_collection=is_collection, meta=self.meta, jsonapi=self.jsonapi
        )

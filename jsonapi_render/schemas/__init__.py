"""Pydantic value types for JSON:API selection and error state."""

from .context import (
    EmptyBody,
    PlainDetailList,
    RawText,
    ResponseBody,
    ResponseContext,
    StructuredError,
    body_from,
)
from .options import RequestSelection, SelectionOptions, SelectionOverrides

__all__ = [
    "EmptyBody",
    "PlainDetailList",
    "RawText",
    "ResponseBody",
    "ResponseContext",
    "StructuredError",
    "body_from",
    "RequestSelection",
    "SelectionOptions",
    "SelectionOverrides",
]

"""Core JSON:API document, option and error helpers."""

from .document import NO_CONTENT, JSONAPIDocumentBuilder, NoContent, render_document
from .errors import JSONAPIError, JSONAPIErrorBuilder, MalformedInput, UnserializableOutput
from .terms import parse_terms, resolve_terms

__all__ = [
    "NO_CONTENT",
    "JSONAPIDocumentBuilder",
    "NoContent",
    "render_document",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "MalformedInput",
    "UnserializableOutput",
    "parse_terms",
    "resolve_terms",
]

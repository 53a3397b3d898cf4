"""JSON:API document serialization for FastAPI applications."""

from .app import configure_jsonapi
from .config import JSONAPISettings, get_settings
from .core.document import NO_CONTENT, JSONAPIDocumentBuilder
from .core.errors import JSONAPIErrorBuilder, MalformedInput, UnserializableOutput
from .core.normalizer import ErrorNormalizer
from .core.options import SelectionOptionsBuilder
from .serializers.base import JSONAPISerializer
from .serializers.engine import SerializationEngine
from .serializers.registry import SerializerRegistry
from .viewsets.base import JSONAPIViewSet

__all__ = [
    "configure_jsonapi",
    "JSONAPISettings",
    "get_settings",
    "NO_CONTENT",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "MalformedInput",
    "UnserializableOutput",
    "ErrorNormalizer",
    "SelectionOptionsBuilder",
    "JSONAPISerializer",
    "SerializationEngine",
    "SerializerRegistry",
    "JSONAPIViewSet",
]

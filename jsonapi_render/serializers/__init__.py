"""Resource serializers and the document serialization engine."""

from .base import JSONAPISerializer
from .engine import SerializationEngine
from .registry import SerializerRegistry

__all__ = ["JSONAPISerializer", "SerializationEngine", "SerializerRegistry"]

"""Wire the serialization engine and error boundary into a FastAPI app."""

import logging

from fastapi import FastAPI

from jsonapi_render.config import JSONAPISettings, get_settings
from jsonapi_render.core.normalizer import ErrorNormalizer
from jsonapi_render.middleware.error_handler import (
    ErrorHandlerMiddleware,
    register_error_handlers,
)
from jsonapi_render.serializers.engine import SerializationEngine
from jsonapi_render.serializers.registry import SerializerRegistry

logger = logging.getLogger(__name__)


def configure_jsonapi(
    app: FastAPI,
    *,
    registry: SerializerRegistry | None = None,
    settings: JSONAPISettings | None = None,
) -> SerializationEngine:
    """Install JSON:API error handling on ``app`` and return a shared engine.

    The registry is frozen here; register every serializer before calling.
    """
    settings = settings or get_settings()
    registry = registry or SerializerRegistry()
    registry.freeze()

    normalizer = ErrorNormalizer(settings)
    register_error_handlers(app, normalizer)
    app.add_middleware(ErrorHandlerMiddleware, normalizer=normalizer)

    engine = SerializationEngine(registry, settings)
    app.state.jsonapi_engine = engine
    logger.info("JSON:API serialization configured (jsonapi=%s)", settings.jsonapi_version)
    return engine

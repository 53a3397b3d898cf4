"""Shared fixtures: settings, registry, engine and options builder."""

import pytest

from jsonapi_render.config import JSONAPISettings
from jsonapi_render.core.options import SelectionOptionsBuilder
from jsonapi_render.serializers.engine import SerializationEngine
from tests.entities import make_registry


@pytest.fixture
def settings():
    return JSONAPISettings(_env_file=None)


@pytest.fixture
def registry():
    return make_registry()


@pytest.fixture
def engine(registry, settings):
    return SerializationEngine(registry, settings)


@pytest.fixture
def builder(settings):
    return SelectionOptionsBuilder(settings)

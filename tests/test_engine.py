"""Entity and Collection Serializers: documents, inclusion and sparse fieldsets.

Tests cover:
    - single resource documents with attributes, linkage and included resources
    - nested include terms walk the relationship graph and include intermediates
    - included never repeats a (type, id) pair or a primary resource
    - sparse fieldsets narrow one type only and never drop type/id
    - unloaded relationships are neither linked nor included
    - no-content outcomes for absent entities and empty collections
    - the engine freezes its serializer registry
"""

import pytest

from jsonapi_render.config import JSONAPISettings
from jsonapi_render.core.document import NO_CONTENT
from jsonapi_render.schemas.options import SelectionOptions, SelectionOverrides
from jsonapi_render.serializers.engine import SerializationEngine
from jsonapi_render.serializers.registry import SerializerRegistry
from tests.entities import Author, Draft, Post, PostSerializer, Tag


@pytest.fixture
def graph():
    bea = Author(id=9, name="Bea")
    hi = Post(id=1, title="Hi", author=bea, tags=[Tag(id=1, label="api")])
    bye = Post(id=2, title="Bye", author=bea)
    bea.posts = [hi, bye]
    return {"bea": bea, "hi": hi, "bye": bye}


# ─── serialize_model ─────────────────────────────────────────────

def test_round_trip_with_included_author(engine, builder, graph):
    options = builder.build(overrides=SelectionOverrides(include=["author"]))
    document = engine.serialize_model(graph["hi"], options)

    assert document["data"]["type"] == "posts"
    assert document["data"]["id"] == "1"
    assert document["data"]["attributes"] == {"title": "Hi"}
    assert document["data"]["relationships"]["author"]["data"] == {"type": "people", "id": "9"}
    assert [(r["type"], r["id"]) for r in document["included"]] == [("people", "9")]
    assert document["jsonapi"] == {"version": "1.0"}


def test_to_many_relationship_linkage(engine, graph):
    document = engine.serialize_model(graph["hi"], SelectionOptions())
    assert document["data"]["relationships"]["tags"]["data"] == [{"type": "tags", "id": "1"}]
    assert "included" not in document


def test_nested_include_adds_intermediate_and_leaf(engine, graph):
    options = SelectionOptions(include=frozenset({"author.posts"}))
    document = engine.serialize_model(graph["hi"], options)
    keys = [(r["type"], r["id"]) for r in document["included"]]
    assert keys == [("people", "9"), ("posts", "2")]


def test_included_is_sorted_by_term(engine, graph):
    options = SelectionOptions(include=frozenset({"tags", "author"}))
    document = engine.serialize_model(graph["hi"], options)
    assert [r["type"] for r in document["included"]] == ["people", "tags"]


def test_unknown_include_term_is_ignored(engine, graph):
    options = SelectionOptions(include=frozenset({"editor.posts"}))
    document = engine.serialize_model(graph["hi"], options)
    assert "included" not in document


def test_sparse_fieldset_narrows_attributes_and_relationships(engine, graph):
    options = SelectionOptions(fields={"posts": frozenset({"title"})})
    resource = engine.serialize_model(graph["hi"], options)["data"]
    assert resource == {"type": "posts", "id": "1", "attributes": {"title": "Hi"}}


def test_empty_fieldset_keeps_type_and_id(engine, graph):
    options = SelectionOptions(fields={"posts": frozenset()})
    assert engine.serialize_model(graph["hi"], options)["data"] == {"type": "posts", "id": "1"}


def test_fieldset_applies_to_its_type_only(engine, graph):
    options = SelectionOptions(
        include=frozenset({"author"}), fields={"posts": frozenset({"title"})}
    )
    document = engine.serialize_model(graph["hi"], options)
    author = document["included"][0]
    assert author["attributes"] == {"name": "Bea"}
    assert author["relationships"]["posts"]["data"] == [
        {"type": "posts", "id": "1"},
        {"type": "posts", "id": "2"},
    ]


def test_unloaded_relationship_is_skipped(engine):
    options = SelectionOptions(include=frozenset({"author"}))
    document = engine.serialize_model(Draft(id=5, title="wip"), options)
    assert document["data"] == {"type": "drafts", "id": "5", "attributes": {"title": "wip"}}
    assert "included" not in document


def test_absent_entity_serializes_to_null_data(engine):
    assert engine.serialize_model(None, SelectionOptions()) == {"data": None}


def test_base_url_adds_links(registry):
    settings = JSONAPISettings(_env_file=None, base_url="http://api.test/")
    engine = SerializationEngine(registry, settings)
    resource = engine.serialize_model(Post(id=3, title="Links"), SelectionOptions())["data"]
    assert resource["links"] == {"self": "http://api.test/posts/3"}
    assert resource["relationships"]["author"] == {
        "links": {
            "self": "http://api.test/posts/3/relationships/author",
            "related": "http://api.test/posts/3/author",
        },
        "data": None,
    }


def test_engine_freezes_a_supplied_registry(settings):
    registry = SerializerRegistry()
    SerializationEngine(registry, settings)
    assert registry.frozen


def test_default_registry_is_frozen(settings):
    engine = SerializationEngine(settings=settings)
    assert engine.registry.frozen
    with pytest.raises(RuntimeError):
        engine.registry.register(PostSerializer)


# ─── serialize_model_or_empty ────────────────────────────────────

def test_absent_entity_without_meta_is_no_content(engine):
    assert engine.serialize_model_or_empty(None, SelectionOptions()) is NO_CONTENT


def test_absent_entity_with_meta_keeps_meta(engine):
    options = SelectionOptions(include=frozenset({"author"}), meta={"reason": "gone"})
    assert engine.serialize_model_or_empty(None, options) == {
        "data": None,
        "meta": {"reason": "gone"},
    }


def test_present_entity_is_serialized(engine, graph):
    document = engine.serialize_model_or_empty(graph["bye"], SelectionOptions())
    assert document["data"]["id"] == "2"


# ─── serialize_models ────────────────────────────────────────────

def test_collection_data_is_always_a_list(engine, graph):
    document = engine.serialize_models([graph["hi"]], SelectionOptions())
    assert isinstance(document["data"], list)
    assert document["data"][0]["id"] == "1"


def test_collection_includes_shared_resource_once(engine, graph):
    options = SelectionOptions(include=frozenset({"author"}), is_collection=True)
    document = engine.serialize_models([graph["hi"], graph["bye"]], options)
    assert [(r["type"], r["id"]) for r in document["included"]] == [("people", "9")]


def test_collection_never_includes_primary_resources(engine, graph):
    options = SelectionOptions(include=frozenset({"author.posts"}), is_collection=True)
    document = engine.serialize_models([graph["hi"], graph["bye"]], options)
    assert [(r["type"], r["id"]) for r in document["included"]] == [("people", "9")]


def test_empty_collection_without_meta_is_no_content(engine):
    assert engine.serialize_models_or_empty([], SelectionOptions()) is NO_CONTENT


def test_empty_collection_with_meta_has_empty_data(engine):
    options = SelectionOptions(meta={"total": 0}, jsonapi={"version": "1.0"})
    assert engine.serialize_models_or_empty([], options) == {
        "data": [],
        "meta": {"total": 0},
        "jsonapi": {"version": "1.0"},
    }


def test_serialize_models_accepts_none(engine):
    assert engine.serialize_models(None, SelectionOptions()) == {"data": []}

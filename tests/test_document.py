"""Document builder, the no-content outcome and wire rendering.

Tests cover:
    - optional members (included, meta, jsonapi) appear only when given
    - NO_CONTENT is a falsy singleton
    - compact and pretty rendering
    - values JSON cannot represent raise UnserializableOutput
"""

import json

import pytest

from jsonapi_render.core.document import (
    NO_CONTENT,
    JSONAPIDocumentBuilder,
    NoContent,
    render_document,
)
from jsonapi_render.core.errors import JSONAPIErrorBuilder, UnserializableOutput


def test_single_document_members():
    builder = JSONAPIDocumentBuilder()
    assert builder.build_single({"type": "posts", "id": "1"}) == {
        "data": {"type": "posts", "id": "1"}
    }
    document = builder.build_single(None, included=[], meta={}, jsonapi={"version": "1.0"})
    assert document == {"data": None, "meta": {}, "jsonapi": {"version": "1.0"}}


def test_collection_document_with_included():
    document = JSONAPIDocumentBuilder().build_collection(
        [{"type": "posts", "id": "1"}], included=[{"type": "people", "id": "9"}]
    )
    assert document["data"] == [{"type": "posts", "id": "1"}]
    assert document["included"] == [{"type": "people", "id": "9"}]


def test_no_content_is_a_falsy_singleton():
    assert NoContent() is NO_CONTENT
    assert not NO_CONTENT


def test_error_document_envelope():
    builder = JSONAPIErrorBuilder()
    error = builder.error_object(title="", detail=None, status=400, source=None)
    assert set(error) == {"id", "status"}
    assert builder.error_document([error]) == {"errors": [error]}


# ─── render_document ─────────────────────────────────────────────

def test_compact_rendering_has_no_whitespace():
    assert render_document({"data": [1, 2]}) == b'{"data":[1,2]}'


def test_pretty_rendering_round_trips():
    rendered = render_document({"data": {"id": "1"}}, "pretty")
    assert b"\n" in rendered
    assert json.loads(rendered) == {"data": {"id": "1"}}


def test_rendering_keeps_unicode():
    assert render_document({"title": "café"}) == '{"title":"café"}'.encode("utf-8")


@pytest.mark.parametrize("value", [object(), float("nan"), {1, 2}])
def test_unrepresentable_values_raise(value):
    with pytest.raises(UnserializableOutput) as info:
        render_document({"data": {"attributes": {"value": value}}})
    assert info.value.detail == "Unserializable entities in the response body"
    assert info.value.status_code == 400

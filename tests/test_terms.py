"""Term Set Resolver: parsing and include/exclude reconciliation.

Tests cover:
    - comma-delimited strings and sequences normalize to the same term set
    - an excluded prefix removes every deeper include term
    - exclusion matches whole segments, never partial names
    - an empty exclude set leaves the include set untouched
    - nothing left to include resolves to None
"""

import pytest

from jsonapi_render.core.terms import parse_terms, resolve_terms, term_prefixes


# ─── parse_terms ─────────────────────────────────────────────────

def test_parse_terms_splits_comma_delimited_string():
    assert parse_terms("author,comments.author") == {"author", "comments.author"}


def test_parse_terms_accepts_sequences_with_embedded_commas():
    assert parse_terms(["author", "tags,comments"]) == {"author", "tags", "comments"}


def test_parse_terms_drops_blank_segments_and_whitespace():
    assert parse_terms(" author, ,tags ,") == {"author", "tags"}


@pytest.mark.parametrize("value", [None, "", []])
def test_parse_terms_empty_inputs(value):
    assert parse_terms(value) == frozenset()


def test_term_prefixes_yields_leading_paths():
    assert list(term_prefixes("author.posts.tags")) == [
        "author",
        "author.posts",
        "author.posts.tags",
    ]


# ─── resolve_terms ───────────────────────────────────────────────

def test_excluded_prefix_removes_deeper_term():
    assert resolve_terms(["author.posts.tags"], ["author.posts"]) is None


def test_excluding_root_removes_all_descendants():
    resolved = resolve_terms("author,author.posts,author.posts.tags,tags", "author")
    assert resolved == {"tags"}


def test_exclusion_is_not_inherited_by_parents():
    resolved = resolve_terms("author,author.posts", "author.posts")
    assert resolved == {"author"}


def test_exclusion_matches_whole_segments_only():
    resolved = resolve_terms("authors,author.posts", "author")
    assert resolved == {"authors"}


def test_empty_exclude_leaves_includes_unchanged():
    include = ["author", "comments.author", "tags"]
    assert resolve_terms(include, []) == parse_terms(include)


def test_everything_excluded_resolves_to_none():
    assert resolve_terms("author", "author") is None

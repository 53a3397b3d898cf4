"""Parsing and reconciliation of include/exclude relationship paths."""

from __future__ import annotations

from typing import Iterable, Iterator

TermInput = str | Iterable[str] | None


def parse_terms(value: TermInput) -> frozenset[str]:
    """Normalize a comma-delimited string or a sequence of strings into terms."""
    if not value:
        return frozenset()
    values = [value] if isinstance(value, str) else list(value)
    terms: set[str] = set()
    for item in values:
        terms.update(part.strip() for part in str(item).split(",") if part.strip())
    return frozenset(terms)


def term_prefixes(term: str) -> Iterator[str]:
    """Yield ``a``, ``a.b``, ``a.b.c`` for the term ``a.b.c``."""
    segments = term.split(".")
    for length in range(1, len(segments) + 1):
        yield ".".join(segments[:length])


def resolve_terms(include: TermInput, exclude: TermInput) -> frozenset[str] | None:
    """Drop every include term that has itself or a prefix in the exclude set.

    Exclusion is prefix-transitive: excluding ``author`` also removes
    ``author.posts``. Returns ``None`` when nothing is left to include.
    """
    included = parse_terms(include)
    excluded = parse_terms(exclude)
    resolved = frozenset(
        term
        for term in included
        if not any(prefix in excluded for prefix in term_prefixes(term))
    )
    return resolved or None

"""Literal substring filtering for candidate lists.

Queries are split on single spaces; every non-empty term must appear in a
candidate for it to be kept. Matching is case-sensitive and keeps input
order, so there is no ranking of any kind.
"""

from __future__ import annotations

from collections.abc import Sequence


def query_terms(query: str) -> list[str]:
    """Return the non-empty space-separated terms of ``query``."""
    return [term for term in query.split(" ") if term]


def matches_all_terms(candidate: str, terms: Sequence[str]) -> bool:
    """Return whether every term is a substring of ``candidate``."""
    return all(term in candidate for term in terms)


def filter_candidates(candidates: Sequence[str], query: str) -> Sequence[str]:
    """Return the ordered subsequence of ``candidates`` matching ``query``.

    An empty or whitespace-only query returns ``candidates`` itself.
    """
    terms = query_terms(query)
    if not terms:
        return candidates
    return [candidate for candidate in candidates if matches_all_terms(candidate, terms)]

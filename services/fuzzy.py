"""Trigram based approximate string matching.

A string is padded with two leading spaces and one trailing space and cut into
overlapping windows of three characters, which gives len(s) + 1 trigrams. The
similarity of a query to a candidate is the share of the query's trigrams that
also occur in the candidate:

    similarity(query, candidate) = matches / (len(query) + 1)

The measure is asymmetric on purpose: it is normalised by the query length, so
a short query scores 1.0 against any candidate that contains it at a word
start. Always pass the user's query first and the catalog field second.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

LEADING_PAD = "  "
TRAILING_PAD = " "


def trigrams(text: str) -> List[str]:
    """Return the trigrams of `text` in order, duplicates included."""
    padded = f"{LEADING_PAD}{text}{TRAILING_PAD}"
    return [padded[i:i + 3] for i in range(len(padded) - 2)]


def similarity(query: str, candidate: str) -> float:
    """Score in [0, 1] of how well `candidate` matches `query`."""
    query = query.casefold()
    candidate = candidate.casefold()

    candidate_trigrams = set(trigrams(candidate))
    matches = sum(1 for t in trigrams(query) if t in candidate_trigrams)

    score = matches / (len(query) + 1)
    if not 0.0 <= score <= 1.0:
        return 0.0
    return score


def _sort_key(score: float) -> float:
    try:
        score = float(score)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(score) or math.isinf(score):
        return 0.0
    return score


def rank(query: str, candidates: Iterable[str]) -> List[Tuple[str, float]]:
    """Score every candidate against `query`, keeping the input order."""
    return [(candidate, similarity(query, candidate)) for candidate in candidates]


def rank_sorted(query: str, candidates: Iterable[str]) -> List[Tuple[str, float]]:
    """Like `rank`, ordered by descending score. Ties keep the input order."""
    return sort_ranked(rank(query, candidates))


def sort_ranked(ranked: Iterable[Tuple[T, float]]) -> List[Tuple[T, float]]:
    """Stable descending sort of (item, score) pairs; non-finite scores count as 0."""
    return sorted(ranked, key=lambda pair: _sort_key(pair[1]), reverse=True)


def best_n(query: str, candidates: Sequence[str], n: int) -> List[Tuple[str, float]]:
    """The `n` best matches, or every candidate when there are fewer than `n`."""
    return rank_sorted(query, candidates)[:max(0, n)]


def filter_threshold(query: str, candidates: Iterable[str], threshold: float) -> List[Tuple[str, float]]:
    """Candidates scoring at least `threshold`, in input order."""
    return [(candidate, score) for candidate, score in rank(query, candidates) if score >= threshold]

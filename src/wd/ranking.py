"""Ranking engine — score history entries against a query.

confidence = similarity(path, query) * recency_weight(index)

Similarity is the best of three normalized Damerau-Levenshtein scores:
the full path, the basename, and the ASCII-lowercased basename (scaled by 0.9 so
an exact-case match always wins over a case-insensitive one).
"""

from __future__ import annotations

import logging
import math
import string
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath

from rapidfuzz.distance import DamerauLevenshtein

from wd.errors import UnrepresentablePathError

logger = logging.getLogger(__name__)

ICASE_PENALTY = 0.9

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass(frozen=True)
class Candidate:
    """A ranked history entry."""

    confidence: float
    path: str


# ── String distance ──────────────────────────────────────────


def damerau_levenshtein(a: str, b: str) -> int:
    """Edit distance counting insert, delete, substitute and transpose as 1.

    This is the unrestricted variant: a transposed pair may still be edited
    further (so "ca" -> "abc" costs 2, not 3).
    """
    return DamerauLevenshtein.distance(a, b)


def normalized_damerau_levenshtein(a: str, b: str) -> float:
    """Similarity in [0, 1]; 1.0 means identical."""
    if a == b:
        return 1.0
    return DamerauLevenshtein.normalized_similarity(a, b)


# ── Scoring ──────────────────────────────────────────────────


def _as_text(path: str) -> str:
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UnrepresentablePathError(f"couldn't turn path to str: {path!r}") from e
    return path


def _ascii_lower(s: str) -> str:
    # only A-Z are folded, so the length never changes
    return s.translate(_ASCII_LOWER)


def _basename(path: str) -> str | None:
    name = PurePath(path).name
    if not name or name == "..":
        return None
    return name


def similarity(path: str, query: str) -> float:
    """Best textual match of `query` against `path` or its final component.

    Raises UnrepresentablePathError if `path` holds undecodable bytes.
    """
    text = _as_text(path)
    basename = _basename(text)

    full = normalized_damerau_levenshtein(text, query)
    base = normalized_damerau_levenshtein(basename, query) if basename else 0.0
    base_icase = 0.0
    if basename:
        base_icase = normalized_damerau_levenshtein(_ascii_lower(basename), _ascii_lower(query))
    return max(full, base, base_icase * ICASE_PENALTY)


def recency_weight(index: int) -> float:
    """Logistic decay from 1.0 at index 0 towards 0.8 for old entries."""
    return 1.2 - 0.4 / (1.0 + math.exp(index / -2.0))


def confidence(path: str, query: str, index: int) -> float:
    return similarity(path, query) * recency_weight(index)


# ── Ranking ──────────────────────────────────────────────────


def rank(
    query: str,
    paths: Iterable[str],
    min_confidence: float,
    limit: int = 1,
) -> list[Candidate]:
    """Score `paths` (MRU order) against `query`, best first.

    Entries scoring at or below `min_confidence` are dropped. Equal scores
    keep history order. Entries that cannot be compared as text are skipped.
    """
    scored: list[Candidate] = []
    for index, path in enumerate(paths):
        try:
            score = confidence(path, query, index)
        except UnrepresentablePathError as e:
            logger.warning("Skipping history entry: %s", e)
            continue
        if score > min_confidence:
            scored.append(Candidate(score, path))

    # sorted() is stable, so ties stay in MRU order
    scored = sorted(scored, key=lambda c: c.confidence, reverse=True)
    return scored[: max(limit, 0)]

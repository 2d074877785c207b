"""Fuzzy string scoring.

This module scores one query token against one string value. Edit
distance comes from rapidfuzz; the comparison policy on top of it ranks
exact matches above substring matches above edit-distance matches,
whatever the string lengths.
"""

from dataclasses import dataclass, field
from enum import Enum

from rapidfuzz.distance import Levenshtein

from fuzzbox.config.defaults import (
    DEFAULT_MAX_STRING_LENGTH,
    DEFAULT_THRESHOLD,
    SUBSTRING_BASE_SCORE,
    SUBSTRING_LENGTH_BONUS,
)


class MatchType(str, Enum):
    """Which comparison rule produced a score."""

    EXACT = "exact"
    SUBSTRING = "substring"
    EDIT_DISTANCE = "edit_distance"
    NONE = "none"


@dataclass
class FuzzyMatch:
    """Result of scoring one token against one value."""

    score: float  # 0-1
    match_type: MatchType
    warnings: list[str] = field(default_factory=list)


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance with unit-cost insert, delete and substitute.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    return Levenshtein.distance(a, b)


def _truncate(value: str, max_length: int, label: str, warnings: list[str]) -> str:
    if len(value) <= max_length:
        return value
    warnings.append(
        f"{label} string truncated from {len(value)} to {max_length} characters"
    )
    return value[:max_length]


def fuzzy_score(
    query: str,
    target: str,
    threshold: float = DEFAULT_THRESHOLD,
    case_sensitive: bool = False,
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH,
) -> FuzzyMatch:
    """Score how well ``query`` matches ``target``.

    Args:
        query: The search token.
        target: The field value to compare against.
        threshold: Minimum edit-distance similarity (0-1); lower scores
            become 0. Exact and substring matches ignore it.
        case_sensitive: Compare without case folding.
        max_string_length: Both strings are cut to this length first.

    Returns:
        FuzzyMatch with a score in [0, 1] and any truncation warnings.
    """
    warnings: list[str] = []
    q = _truncate(query, max_string_length, "Query", warnings)
    t = _truncate(target, max_string_length, "Target", warnings)

    if not case_sensitive:
        q = q.casefold()
        t = t.casefold()

    if q == t:
        return FuzzyMatch(1.0, MatchType.EXACT, warnings)
    if not q or not t:
        return FuzzyMatch(0.0, MatchType.NONE, warnings)

    if q in t:
        score = SUBSTRING_BASE_SCORE + SUBSTRING_LENGTH_BONUS * len(q) / len(t)
        return FuzzyMatch(score, MatchType.SUBSTRING, warnings)

    score = 1 - levenshtein_distance(q, t) / max(len(q), len(t))
    if score < threshold or score <= 0:
        return FuzzyMatch(0.0, MatchType.NONE, warnings)
    return FuzzyMatch(score, MatchType.EDIT_DISTANCE, warnings)

"""Search system for fuzzbox.

Fuzzy, field-weighted search over in-memory records, with keyword
triggers that filter the collection before scoring.
"""

from fuzzbox.search.engine import SearchEngine
from fuzzbox.search.fuzzy import FuzzyMatch, MatchType, fuzzy_score, levenshtein_distance
from fuzzbox.search.keywords import KeywordFilterResult, KeywordIndex, KeywordSplit
from fuzzbox.search.nested import MISSING, has_path, resolve_path
from fuzzbox.search.results import MatchedKeyword, QueryResult, ScoredResult, WarningSet
from fuzzbox.search.scorer import ItemScore, normalize_field_specs, score_item, stringify
from fuzzbox.search.tokenize import tokenize
from fuzzbox.search.validate import (
    ValidatedOptions,
    validate_collection,
    validate_fields,
    validate_keywords,
    validate_options,
    validate_settings,
)

__all__ = [
    # Engine
    "SearchEngine",
    "QueryResult",
    "ScoredResult",
    "MatchedKeyword",
    "WarningSet",
    # Fuzzy
    "FuzzyMatch",
    "MatchType",
    "fuzzy_score",
    "levenshtein_distance",
    # Fields
    "ItemScore",
    "normalize_field_specs",
    "score_item",
    "stringify",
    "MISSING",
    "has_path",
    "resolve_path",
    "tokenize",
    # Keywords
    "KeywordIndex",
    "KeywordSplit",
    "KeywordFilterResult",
    # Validation
    "ValidatedOptions",
    "validate_collection",
    "validate_fields",
    "validate_keywords",
    "validate_options",
    "validate_settings",
]

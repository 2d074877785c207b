"""fuzzbox - fuzzy search and keyword filtering over in-memory records."""

from fuzzbox.config.schema import FieldSpec, KeywordDefinition, KeywordMode, KeywordsConfig, SearchSettings
from fuzzbox.exceptions import ErrorCode, FuzzboxError, OptionsError
from fuzzbox.search import MatchedKeyword, QueryResult, ScoredResult, SearchEngine

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SearchEngine",
    "QueryResult",
    "ScoredResult",
    "MatchedKeyword",
    "FieldSpec",
    "KeywordDefinition",
    "KeywordMode",
    "KeywordsConfig",
    "SearchSettings",
    "ErrorCode",
    "FuzzboxError",
    "OptionsError",
]

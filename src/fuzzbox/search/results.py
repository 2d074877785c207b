"""Result types returned by the search engine."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ScoredResult:
    """One matching item and its relevance score (0-1)."""

    item: Any
    score: float


@dataclass(frozen=True)
class MatchedKeyword:
    """A keyword that fired, with the query tokens that triggered it."""

    name: str
    terms: list[str]


@dataclass(frozen=True)
class QueryResult:
    """Response from a query."""

    results: list[ScoredResult] = field(default_factory=list)
    matched_keywords: list[MatchedKeyword] = field(default_factory=list)
    tokens: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "QueryResult":
        return cls()

    @property
    def items(self) -> list[Any]:
        """The matching items, in result order."""
        return [result.item for result in self.results]


class WarningSet:
    """Insertion-ordered, de-duplicated collection of warning messages."""

    def __init__(self) -> None:
        self._messages: dict[str, None] = {}

    def add(self, message: str) -> None:
        self._messages.setdefault(message, None)

    def extend(self, messages: Iterable[str]) -> None:
        for message in messages:
            self.add(message)

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, message: object) -> bool:
        return message in self._messages

    def to_list(self) -> list[str]:
        return list(self._messages)

"""Keyword extraction and keyword-driven collection filtering.

Tokens that match a configured trigger are pulled out of the search
text and routed to the owning definition's handler, which narrows the
collection. Handlers are caller-supplied code: a handler that returns
something other than a list or tuple is logged and skipped.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from fuzzbox.config.schema import KeywordDefinition, KeywordMode, KeywordsConfig
from fuzzbox.search.results import MatchedKeyword
from fuzzbox.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass
class KeywordSplit:
    """Query tokens separated into keyword hits and search terms."""

    keyword_terms: dict[str, list[str]] = field(default_factory=dict)
    search_tokens: list[str] = field(default_factory=list)

    @property
    def fired(self) -> bool:
        """True if at least one trigger matched."""
        return bool(self.keyword_terms)


@dataclass
class KeywordFilterResult:
    """Collection after keyword filtering plus the keywords that applied."""

    collection: list[Any]
    matched_keywords: list[MatchedKeyword] = field(default_factory=list)


class KeywordIndex:
    """Trigger lookup and filter pipeline for a set of keyword definitions."""

    def __init__(
        self,
        config: KeywordsConfig | None = None,
        case_sensitive: bool = False,
    ) -> None:
        """Build the trigger map.

        Args:
            config: Keyword definitions and combination mode. None means
                no keywords; every token is a search token.
            case_sensitive: Match triggers without case folding.
        """
        self.config = config or KeywordsConfig()
        self.case_sensitive = case_sensitive
        self._triggers: dict[str, KeywordDefinition] = {}
        for definition in self.config.definitions:
            for trigger in definition.triggers:
                self._triggers[self._fold(trigger)] = definition

    @property
    def mode(self) -> KeywordMode:
        return self.config.mode

    def __len__(self) -> int:
        return len(self.config.definitions)

    def _fold(self, token: str) -> str:
        return token if self.case_sensitive else token.casefold()

    def lookup(self, token: str) -> KeywordDefinition | None:
        """Return the definition a token triggers, if any."""
        return self._triggers.get(self._fold(token))

    def extract(self, tokens: Sequence[str]) -> KeywordSplit:
        """Split tokens into keyword hits (grouped by name) and search tokens.

        Matched terms keep their original casing and query order;
        repeated triggers are kept.
        """
        split = KeywordSplit()
        for token in tokens:
            definition = self.lookup(token)
            if definition is None:
                split.search_tokens.append(token)
            else:
                split.keyword_terms.setdefault(definition.name, []).append(token)
        return split

    def apply(self, collection: Sequence[Any], split: KeywordSplit) -> KeywordFilterResult:
        """Filter the collection with every definition that fired.

        Definitions run in declaration order. In intersection mode each
        handler receives the previous handler's output; in union mode each
        receives the original collection and outputs are merged by identity,
        first-seen order kept.
        """
        if not split.fired:
            return KeywordFilterResult(list(collection))
        if self.mode == KeywordMode.UNION:
            return self._apply_union(collection, split)
        return self._apply_intersection(collection, split)

    def _fired_definitions(self, split: KeywordSplit) -> list[tuple[KeywordDefinition, list[str]]]:
        return [
            (definition, split.keyword_terms[definition.name])
            for definition in self.config.definitions
            if definition.name in split.keyword_terms
        ]

    def _apply_intersection(
        self, collection: Sequence[Any], split: KeywordSplit
    ) -> KeywordFilterResult:
        current = list(collection)
        matched: list[MatchedKeyword] = []

        for definition, terms in self._fired_definitions(split):
            output = self._run_handler(definition, current, terms)
            if output is None:
                continue
            current = output
            matched.append(MatchedKeyword(definition.name, list(terms)))

        return KeywordFilterResult(current, matched)

    def _apply_union(self, collection: Sequence[Any], split: KeywordSplit) -> KeywordFilterResult:
        merged: list[Any] = []
        seen: set[int] = set()
        matched: list[MatchedKeyword] = []

        for definition, terms in self._fired_definitions(split):
            output = self._run_handler(definition, collection, terms)
            if output is None:
                continue
            matched.append(MatchedKeyword(definition.name, list(terms)))
            for item in output:
                if id(item) not in seen:
                    seen.add(id(item))
                    merged.append(item)

        return KeywordFilterResult(merged, matched)

    def _run_handler(
        self,
        definition: KeywordDefinition,
        collection: Sequence[Any],
        terms: list[str],
    ) -> list[Any] | None:
        """Call a handler on a copy of the collection.

        Returns None if the handler's return value is not a list or tuple.
        """
        output = definition.handler(list(collection), list(terms))
        if not isinstance(output, (list, tuple)):
            log_with_context(
                logger,
                logging.ERROR,
                f'Keyword handler "{definition.name}" must return a list, '
                f"received {type(output).__name__}. Skipping this filter.",
                keyword=definition.name,
                received=type(output).__name__,
            )
            return None
        return list(output)

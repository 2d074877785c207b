"""Search engine over an in-memory collection.

This module ties the pipeline together: tokenize the query, pull out
keyword triggers and filter the collection with them, then fuzzy-score
the remaining items on the configured fields and rank them.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fuzzbox.config.loader import get_config
from fuzzbox.config.schema import FieldSpec, FuzzboxConfig, KeywordsConfig, SearchSettings
from fuzzbox.exceptions import SearchError
from fuzzbox.search.keywords import KeywordIndex
from fuzzbox.search.results import QueryResult, ScoredResult, WarningSet
from fuzzbox.search.scorer import score_item
from fuzzbox.search.tokenize import tokenize
from fuzzbox.search.validate import ValidatedOptions, validate_collection, validate_options
from fuzzbox.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass
class _PendingQuery:
    """The single debounced query waiting for its timer."""

    future: "asyncio.Future[QueryResult]"
    handle: asyncio.TimerHandle

    def cancel(self) -> None:
        self.handle.cancel()
        if not self.future.done():
            self.future.cancel()


class SearchEngine:
    """Fuzzy search with keyword filters over a collection of records.

    Every query scans the whole collection; there is no index. The
    engine is built once from validated options and only its collection
    can be swapped afterwards.

    Example:
        >>> engine = SearchEngine(
        ...     [{"title": "The Witcher 3"}, {"title": "Elden Ring"}],
        ...     fields=["title"],
        ... )
        >>> engine.query("witcher").items
        [{'title': 'The Witcher 3'}]
    """

    def __init__(
        self,
        collection: Iterable[Any],
        fields: list[str | dict[str, Any] | FieldSpec],
        keywords: list[Any] | dict[str, Any] | KeywordsConfig | None = None,
        *,
        threshold: float | None = None,
        limit: int | None = None,
        debounce: float | None = None,
        case_sensitive: bool | None = None,
        min_match_char_length: int | None = None,
        max_string_length: int | None = None,
        settings: SearchSettings | None = None,
    ) -> None:
        """Validate options and build the engine.

        Args:
            collection: Records to search (any sequence or set).
            fields: Field paths or specs to compare against.
            keywords: Keyword definitions, or a mapping/KeywordsConfig with
                ``mode`` and ``definitions``.
            threshold: Minimum edit-distance similarity (0-1).
            limit: Maximum ranked results; None for unbounded.
            debounce: Delay for ``aquery`` in milliseconds.
            case_sensitive: Compare data and triggers without case folding.
            min_match_char_length: Search tokens shorter than this are ignored.
            max_string_length: Strings are truncated to this before scoring.
            settings: Base values for any option left as None.

        Raises:
            OptionsError: If any option is invalid.
        """
        self._options: ValidatedOptions = validate_options(
            collection,
            fields,
            keywords,
            settings,
            threshold=threshold,
            limit=limit,
            debounce=debounce,
            case_sensitive=case_sensitive,
            min_match_char_length=min_match_char_length,
            max_string_length=max_string_length,
        )
        self._collection: list[Any] = self._options.collection
        self._fields: list[FieldSpec] = self._options.fields
        self._settings: SearchSettings = self._options.settings
        self._keywords = KeywordIndex(
            self._options.keywords,
            case_sensitive=self._settings.case_sensitive,
        )
        self._pending: _PendingQuery | None = None

        log_with_context(
            logger,
            logging.DEBUG,
            "Search engine created",
            items=len(self._collection),
            fields=len(self._fields),
            keywords=len(self._keywords),
        )

    @classmethod
    def from_config(
        cls,
        collection: Iterable[Any],
        fields: list[str | dict[str, Any] | FieldSpec],
        keywords: list[Any] | dict[str, Any] | KeywordsConfig | None = None,
        config: FuzzboxConfig | None = None,
    ) -> "SearchEngine":
        """Build an engine whose options come from a loaded configuration.

        Args:
            collection: Records to search.
            fields: Field paths or specs.
            keywords: Keyword definitions.
            config: Configuration to use. None loads the global one.
        """
        config = config or get_config()
        return cls(collection, fields, keywords, settings=config.search)

    @property
    def collection(self) -> list[Any]:
        """The records currently searched."""
        return self._collection

    @property
    def options(self) -> ValidatedOptions:
        """The normalized options the engine was built from."""
        return self._options

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    @property
    def fields(self) -> list[FieldSpec]:
        return list(self._fields)

    def set_collection(self, collection: Iterable[Any]) -> None:
        """Replace the searched records.

        Raises:
            OptionsError: If the collection is not a sequence or set.
        """
        self._collection = validate_collection(collection)
        log_with_context(
            logger, logging.DEBUG, "Collection replaced", items=len(self._collection)
        )

    def query(self, text: str) -> QueryResult:
        """Search the collection.

        Args:
            text: Free-text query. Keyword triggers in it filter the
                collection; the remaining tokens are fuzzy-matched.

        Returns:
            QueryResult with ranked results, the keywords that applied,
            the search tokens and de-duplicated warnings. A query made only
            of keyword triggers returns the filtered collection in order,
            unranked and without the limit, each with score 0.
        """
        tokens = tokenize(text)
        if not tokens:
            return QueryResult.empty()

        split = self._keywords.extract(tokens)
        filtered = self._keywords.apply(self._collection, split)
        matched_keywords = filtered.matched_keywords

        if not split.search_tokens:
            return QueryResult(
                results=[ScoredResult(item, 0.0) for item in filtered.collection],
                matched_keywords=matched_keywords,
                tokens=[],
            )

        min_length = self._settings.min_match_char_length
        valid_tokens = [token for token in split.search_tokens if len(token) >= min_length]
        if not valid_tokens:
            return QueryResult(
                matched_keywords=matched_keywords,
                tokens=split.search_tokens,
            )

        warnings = WarningSet()
        scored: list[ScoredResult] = []
        for item in filtered.collection:
            item_score = score_item(
                item,
                valid_tokens,
                self._fields,
                self._settings.case_sensitive,
                self._settings.max_string_length,
            )
            warnings.extend(item_score.warnings)
            if item_score.score > 0:
                scored.append(ScoredResult(item, item_score.score))

        # Stable: equal scores keep collection order
        scored.sort(key=lambda r: r.score, reverse=True)
        if self._settings.limit is not None:
            scored = scored[: self._settings.limit]

        log_with_context(
            logger,
            logging.DEBUG,
            "Query finished",
            tokens=len(valid_tokens),
            results=len(scored),
            warnings=len(warnings),
        )

        return QueryResult(
            results=scored,
            matched_keywords=matched_keywords,
            tokens=split.search_tokens,
            warnings=warnings.to_list(),
        )

    async def aquery(self, text: str) -> QueryResult:
        """Debounced variant of ``query``.

        With a debounce delay, the query runs after the delay unless
        another ``aquery`` call arrives first; the superseded call is
        cancelled and only the latest one resolves.

        Raises:
            SearchError: If no event loop is running.
            asyncio.CancelledError: If a newer call superseded this one.
        """
        if self._settings.debounce <= 0:
            return self.query(text)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SearchError("aquery requires a running event loop") from e

        self._cancel_pending()
        future: asyncio.Future[QueryResult] = loop.create_future()
        handle = loop.call_later(
            self._settings.debounce / 1000, self._run_pending, future, text
        )
        self._pending = _PendingQuery(future, handle)
        return await future

    def _cancel_pending(self) -> None:
        if self._pending is None:
            return
        if not self._pending.future.done():
            log_with_context(logger, logging.DEBUG, "Debounced query superseded")
        self._pending.cancel()
        self._pending = None

    def _run_pending(self, future: "asyncio.Future[QueryResult]", text: str) -> None:
        if self._pending is not None and self._pending.future is future:
            self._pending = None
        if future.done():
            return
        try:
            future.set_result(self.query(text))
        except Exception as e:
            future.set_exception(e)

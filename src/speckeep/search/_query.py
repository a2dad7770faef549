# pyright: reportAny=false
"""Query engine: ranks indexed specs against a free-text query."""

import math
from typing import Final

import structlog
from structlog.typing import FilteringBoundLogger

from speckeep.exceptions import InvalidQueryError
from speckeep.search._index import IndexedDocument, IndexSnapshot, SearchIndex
from speckeep.search._snippet import (
    DEFAULT_SNIPPET_WINDOW,
    build_snippet,
    leading_snippet,
)
from speckeep.search._tokenize import tokens
from speckeep.spec._models import SearchOptions, SearchResult

__all__ = ["DEFAULT_LIMIT", "QueryEngine", "idf"]

DEFAULT_LIMIT: Final = 20


def idf(total_docs: int, doc_frequency: int) -> float:
    """Inverse document frequency, ``log(1 + total_docs / doc_frequency)``."""
    return math.log(1 + total_docs / doc_frequency)


class _Candidate:
    __slots__: Final = ("document", "matched", "score")

    def __init__(self, document: IndexedDocument) -> None:
        self.document: IndexedDocument = document
        self.matched: int = 0
        self.score: float = 0.0

    def sort_key(self) -> tuple[int, float, float, str]:
        spec = self.document.spec
        return (-self.matched, -self.score, -spec.updated_at.timestamp(), spec.id)


class QueryEngine:
    """Read-only search over a ``SearchIndex``.

    Documents matching more distinct query tokens rank first; ties are broken
    by tf-idf score, then by most recent update, then by ascending spec ID,
    giving a total order that is stable for identical index state.
    """

    __slots__: Final = ("_default_limit", "_index", "_logger", "_snippet_window")

    def __init__(
        self,
        index: SearchIndex,
        *,
        default_limit: int = DEFAULT_LIMIT,
        snippet_window: int = DEFAULT_SNIPPET_WINDOW,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the query engine.

        Args:
            index: The index to search.
            default_limit: Result limit used when no options are given.
            snippet_window: Maximum snippet length in characters.
            logger: Optional structured logger.
        """
        self._index: SearchIndex = index
        self._default_limit: int = default_limit
        self._snippet_window: int = snippet_window
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else structlog.get_logger(__name__)
        )

    @property
    def default_limit(self) -> int:
        """Result limit used when no options are given."""
        return self._default_limit

    def search(
        self, query: str, options: SearchOptions | None = None
    ) -> list[SearchResult]:
        """Search the index.

        Args:
            query: Free-text query. Normalized the same way as indexed text.
            options: Result limit and optional status filter.

        Returns:
            Ranked results, at most ``options.limit`` long. Empty when the
            query has no tokens after normalization or nothing matches.

        Raises:
            InvalidQueryError: If the limit is not positive.
        """
        if options is None:
            options = SearchOptions(limit=self._default_limit)
        if options.limit < 1:
            msg = f"Search limit must be positive, got {options.limit}"
            raise InvalidQueryError(msg, field="limit")

        query_tokens = list(dict.fromkeys(tokens(query)))
        if not query_tokens:
            return []

        snapshot = self._index.snapshot()
        if snapshot.total_docs == 0:
            return []

        candidates = self._score(snapshot, query_tokens)
        if options.status_filter is not None:
            candidates = [
                c
                for c in candidates
                if c.document.spec.status == options.status_filter
            ]
        candidates.sort(key=_Candidate.sort_key)

        token_set = frozenset(query_tokens)
        results = [
            self._to_result(candidate, token_set)
            for candidate in candidates[: options.limit]
        ]
        self._logger.debug(
            "search",
            query=query,
            tokens=query_tokens,
            candidates=len(candidates),
            returned=len(results),
        )
        return results

    def _score(
        self, snapshot: IndexSnapshot, query_tokens: list[str]
    ) -> list[_Candidate]:
        """Accumulate per-document tf-idf scores for the query tokens."""
        total_docs = snapshot.total_docs
        candidates: dict[str, _Candidate] = {}
        for token in query_tokens:
            doc_frequency = snapshot.doc_frequency(token)
            if doc_frequency == 0:
                continue
            weight = idf(total_docs, doc_frequency)
            for spec_id in dict.fromkeys(p.spec_id for p in snapshot.postings(token)):
                candidate = candidates.get(spec_id)
                if candidate is None:
                    document = snapshot.document(spec_id)
                    if document is None:
                        continue
                    candidate = candidates[spec_id] = _Candidate(document)
                candidate.matched += 1
                candidate.score += candidate.document.term_frequency(token) * weight
        return list(candidates.values())

    def _to_result(
        self, candidate: _Candidate, query_tokens: frozenset[str]
    ) -> SearchResult:
        spec = candidate.document.spec
        for text in (spec.body, spec.title):
            excerpt = build_snippet(text, query_tokens, window=self._snippet_window)
            if excerpt is not None:
                snippet, spans = excerpt
                break
        else:
            snippet = leading_snippet(spec.body, window=self._snippet_window)
            spans = ()
        return SearchResult(
            spec_id=spec.id,
            score=candidate.score,
            snippet=snippet,
            highlight_spans=spans,
        )

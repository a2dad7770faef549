"""Full-text search over specs.

Example:
    >>> from speckeep.search import QueryEngine, SearchIndex
    >>> index = SearchIndex()
    >>> index.upsert(spec)
    >>> QueryEngine(index).search("caching")
"""

from speckeep.search._index import IndexedDocument, IndexSnapshot, SearchIndex
from speckeep.search._query import DEFAULT_LIMIT, QueryEngine, idf
from speckeep.search._snippet import (
    DEFAULT_SNIPPET_WINDOW,
    build_snippet,
    leading_snippet,
)
from speckeep.search._tokenize import MIN_TOKEN_LENGTH, token_spans, tokens

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_SNIPPET_WINDOW",
    "MIN_TOKEN_LENGTH",
    "IndexSnapshot",
    "IndexedDocument",
    "QueryEngine",
    "SearchIndex",
    "build_snippet",
    "idf",
    "leading_snippet",
    "token_spans",
    "tokens",
]

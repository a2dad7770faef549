"""Project context and full-text search over specification documents.

Example:
    >>> from speckeep import Config, build_services
    >>> services = build_services(Config.load())
    >>> services.synchronizer.sync_once()
    >>> services.query_engine.search("caching")
"""

from speckeep.config import Config
from speckeep.context import ContextAggregator, aggregate_context
from speckeep.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    InvalidQueryError,
    SearchError,
    SpecKeepError,
    SpecNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from speckeep.search import IndexSnapshot, QueryEngine, SearchIndex, tokens
from speckeep.services import SpecServices, build_services
from speckeep.spec import (
    ChangeType,
    Posting,
    ProjectContext,
    RelationKind,
    Relationship,
    SearchOptions,
    SearchResult,
    Spec,
    SpecChange,
    SpecStatus,
)
from speckeep.store import (
    FileSystemSpecStore,
    InMemorySpecStore,
    SpecStore,
    SpecSynchronizer,
)
from speckeep.utils import get_version

__version__ = get_version()

__all__ = [
    "ChangeType",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ContextAggregator",
    "FileSystemSpecStore",
    "InMemorySpecStore",
    "IndexSnapshot",
    "InvalidQueryError",
    "Posting",
    "ProjectContext",
    "QueryEngine",
    "RelationKind",
    "Relationship",
    "SearchError",
    "SearchIndex",
    "SearchOptions",
    "SearchResult",
    "Spec",
    "SpecChange",
    "SpecKeepError",
    "SpecNotFoundError",
    "SpecServices",
    "SpecStatus",
    "SpecStore",
    "SpecSynchronizer",
    "StoreError",
    "StoreUnavailableError",
    "__version__",
    "aggregate_context",
    "build_services",
    "tokens",
]

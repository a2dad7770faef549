"""Wiring of engine components from configuration.

``build_services`` is the one place where a ``Config`` turns into a running
store, index, query engine, aggregator and synchronizer. The HTTP server and
the CLI both go through it.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from speckeep.config import Config, StoreKind
from speckeep.context import ContextAggregator
from speckeep.search import QueryEngine, SearchIndex
from speckeep.store import (
    FileSystemSpecStore,
    InMemorySpecStore,
    SpecStore,
    SpecSynchronizer,
    watch_spec_files,
)
from speckeep.utils import create_logger


@dataclass(frozen=True, slots=True)
class SpecServices:
    """The engine components for one store.

    Attributes:
        config: Configuration the services were built from.
        logger: Logger shared by every component.
        store: The spec store.
        index: The search index fed by ``synchronizer``.
        query_engine: Search over ``index``.
        aggregator: Project context over ``store``.
        synchronizer: Keeps ``index`` in step with ``store``.
    """

    config: Config
    logger: FilteringBoundLogger
    store: SpecStore
    index: SearchIndex
    query_engine: QueryEngine
    aggregator: ContextAggregator
    synchronizer: SpecSynchronizer

    def watch_triggers(self) -> Iterator[list[str]] | None:
        """Return filesystem change batches when watching is enabled.

        Returns:
            An iterator ending when the synchronizer stops, or None when
            watching is disabled or the store is not on the filesystem.
        """
        if not self.config.sync.watch or not isinstance(
            self.store, FileSystemSpecStore
        ):
            return None
        return watch_spec_files(
            self.store.root, stop_event=self.synchronizer.stop_event
        )


def _create_store(config: Config, logger: FilteringBoundLogger) -> SpecStore:
    if config.store.kind is StoreKind.MEMORY:
        return InMemorySpecStore()
    return FileSystemSpecStore(Path(config.store.path), logger=logger)


def build_services(
    config: Config,
    *,
    store: SpecStore | None = None,
    logger: FilteringBoundLogger | None = None,
) -> SpecServices:
    """Build the engine components.

    Args:
        config: Loaded configuration.
        store: Store to use instead of the configured one.
        logger: Logger to use instead of one built from ``config.logging``.

    Returns:
        Wired services. Nothing is synchronized yet; call
        ``services.synchronizer.sync_once()`` or ``start()``.
    """
    log = logger if logger is not None else create_logger(config.logging)
    spec_store = store if store is not None else _create_store(config, log)
    index = SearchIndex(logger=log)
    synchronizer = SpecSynchronizer(
        spec_store,
        index,
        interval_seconds=config.sync.interval_seconds,
        logger=log,
    )
    if isinstance(spec_store, InMemorySpecStore):
        _ = spec_store.subscribe(synchronizer.apply_change)

    return SpecServices(
        config=config,
        logger=log,
        store=spec_store,
        index=index,
        query_engine=QueryEngine(
            index,
            default_limit=config.search.default_limit,
            snippet_window=config.search.snippet_window,
            logger=log,
        ),
        aggregator=ContextAggregator(
            spec_store, recent_limit=config.context.recent_limit, logger=log
        ),
        synchronizer=synchronizer,
    )

# pyright: reportAny=false
"""Keeps a search index in step with a spec store.

The synchronizer takes a full snapshot of the store, diffs it against the
last snapshot it applied, and replays the differences onto the index. It
runs on a fixed polling interval in a daemon thread; the interval is the
upper bound on how stale search results can be relative to the store. Push
events (in-memory store listeners, filesystem watch batches) shorten that
window but are never required for correctness.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Final

import structlog
from structlog.typing import FilteringBoundLogger

from speckeep.exceptions import SpecNotFoundError, StoreUnavailableError
from speckeep.search._index import SearchIndex
from speckeep.spec._models import ChangeType, Spec, SpecChange
from speckeep.store._protocol import SpecStore

__all__ = ["DEFAULT_SYNC_INTERVAL", "SpecSynchronizer", "diff_snapshots"]

DEFAULT_SYNC_INTERVAL: Final = 2.0


def diff_snapshots(
    previous: Mapping[str, Spec], current: Mapping[str, Spec]
) -> list[SpecChange]:
    """Compute the changes that turn one store snapshot into another.

    Args:
        previous: Specs by ID as last observed.
        current: Specs by ID as observed now.

    Returns:
        Changes ordered by spec ID.
    """
    changes: list[SpecChange] = []
    for spec_id in sorted(previous.keys() | current.keys()):
        before = previous.get(spec_id)
        after = current.get(spec_id)
        if before is None:
            changes.append(SpecChange(ChangeType.CREATED, spec_id))
        elif after is None:
            changes.append(SpecChange(ChangeType.DELETED, spec_id))
        elif before != after:
            changes.append(SpecChange(ChangeType.MODIFIED, spec_id))
    return changes


class SpecSynchronizer:
    """Drains store changes into a search index."""

    __slots__: Final = (
        "_index",
        "_interval",
        "_known",
        "_lock",
        "_logger",
        "_stop",
        "_store",
        "_threads",
    )

    def __init__(
        self,
        store: SpecStore,
        index: SearchIndex,
        *,
        interval_seconds: float = DEFAULT_SYNC_INTERVAL,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            store: The store to read from.
            index: The index to keep up to date.
            interval_seconds: Polling interval, the staleness bound.
            logger: Optional structured logger.
        """
        self._store: SpecStore = store
        self._index: SearchIndex = index
        self._interval: float = interval_seconds
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else structlog.get_logger(__name__)
        )
        self._known: dict[str, Spec] = {}
        self._lock: threading.Lock = threading.Lock()
        self._stop: threading.Event = threading.Event()
        self._threads: list[threading.Thread] = []

    @property
    def interval_seconds(self) -> float:
        """Polling interval in seconds."""
        return self._interval

    @property
    def stop_event(self) -> threading.Event:
        """Event set when the synchronizer is stopped."""
        return self._stop

    @property
    def running(self) -> bool:
        """Whether background threads are alive."""
        return any(thread.is_alive() for thread in self._threads)

    def sync_once(self) -> list[SpecChange]:
        """Snapshot the store and apply every difference to the index.

        Returns:
            The changes applied, ordered by spec ID.

        Raises:
            StoreUnavailableError: If the store cannot be reached. The index
                keeps its last synchronized state.
        """
        with self._lock:
            current = {spec.id: spec for spec in self._store.list_all()}
            changes = diff_snapshots(self._known, current)
            for change in changes:
                if change.change_type is ChangeType.DELETED:
                    _ = self._index.remove(change.spec_id)
                else:
                    self._index.upsert(current[change.spec_id])
            self._known = current

        if changes:
            self._logger.info(
                "sync_applied",
                created=sum(c.change_type is ChangeType.CREATED for c in changes),
                modified=sum(c.change_type is ChangeType.MODIFIED for c in changes),
                deleted=sum(c.change_type is ChangeType.DELETED for c in changes),
            )
        return changes

    def apply_change(self, change: SpecChange) -> None:
        """Apply a single pushed change without a full snapshot.

        Suitable as a listener for ``InMemorySpecStore.subscribe``.

        Args:
            change: The change reported by the store.
        """
        with self._lock:
            if change.change_type is ChangeType.DELETED:
                _ = self._index.remove(change.spec_id)
                _ = self._known.pop(change.spec_id, None)
                return
            try:
                spec = self._store.get(change.spec_id)
            except SpecNotFoundError:
                # Deleted again before we got to it; the next poll settles it
                return
            self._index.upsert(spec)
            self._known[spec.id] = spec

    def _poll(self) -> None:
        while not self._stop.wait(self._interval):
            self._sync_logged()

    def _follow(self, triggers: Iterable[object]) -> None:
        for batch in triggers:
            if self._stop.is_set():
                return
            self._logger.debug("sync_triggered", batch=batch)
            self._sync_logged()

    def _sync_logged(self) -> None:
        try:
            _ = self.sync_once()
        except StoreUnavailableError as e:
            self._logger.warning("sync_store_unavailable", error=str(e))
        except Exception:  # noqa: BLE001
            # Keep polling; a later pass may succeed
            self._logger.exception("sync_failed")

    def start(self, triggers: Iterable[object] | None = None) -> None:
        """Start background synchronization.

        Args:
            triggers: Optional iterable of change batches (for example from
                ``watch_spec_files``); each batch triggers an immediate sync
                in addition to polling.
        """
        if self.running:
            return
        self._stop.clear()
        self._threads = [
            threading.Thread(target=self._poll, name="speckeep-sync", daemon=True)
        ]
        if triggers is not None:
            self._threads.append(
                threading.Thread(
                    target=self._follow,
                    args=(triggers,),
                    name="speckeep-watch",
                    daemon=True,
                )
            )
        for thread in self._threads:
            thread.start()
        self._logger.info(
            "sync_started", interval_seconds=self._interval, watch=triggers is not None
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop background synchronization and wait for threads to exit."""
        self._stop.set()
        for thread in self._threads:
            thread.join(timeout)
        self._threads = []
        self._logger.info("sync_stopped")

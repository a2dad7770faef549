"""Unit tests for index synchronization."""

import threading

import pytest
from structlog.testing import capture_logs

from speckeep.exceptions import StoreUnavailableError
from speckeep.search import SearchIndex
from speckeep.spec import ChangeType, SpecChange
from speckeep.store import InMemorySpecStore, SpecSynchronizer, diff_snapshots


class TestDiffSnapshots:
    def test_detects_every_change_type(self, make_spec) -> None:
        previous = {
            "A": make_spec("A", body="same"),
            "B": make_spec("B", body="old"),
            "C": make_spec("C"),
        }
        current = {
            "A": make_spec("A", body="same"),
            "B": make_spec("B", body="new"),
            "D": make_spec("D"),
        }

        changes = diff_snapshots(previous, current)

        assert changes == [
            SpecChange(ChangeType.MODIFIED, "B"),
            SpecChange(ChangeType.DELETED, "C"),
            SpecChange(ChangeType.CREATED, "D"),
        ]

    def test_identical_snapshots(self, make_spec) -> None:
        snapshot = {"A": make_spec("A")}

        assert diff_snapshots(snapshot, dict(snapshot)) == []


class TestSpecSynchronizer:
    def test_sync_once_applies_changes(self, make_spec) -> None:
        store = InMemorySpecStore.from_specs(
            [make_spec("A", body="alpha"), make_spec("B", body="beta")]
        )
        index = SearchIndex()
        synchronizer = SpecSynchronizer(store, index)

        first = synchronizer.sync_once()
        _ = store.put(make_spec("A", body="gamma"))
        _ = store.delete("B")
        second = synchronizer.sync_once()

        assert [c.change_type for c in first] == [ChangeType.CREATED] * 2
        assert second == [
            SpecChange(ChangeType.MODIFIED, "A"),
            SpecChange(ChangeType.DELETED, "B"),
        ]
        assert index.snapshot().spec_ids == ("A",)
        assert index.snapshot().doc_frequency("gamma") == 1
        assert synchronizer.sync_once() == []

    def test_sync_once_logs_summary(self, make_spec) -> None:
        store = InMemorySpecStore.from_specs([make_spec("A")])
        synchronizer = SpecSynchronizer(store, SearchIndex())

        with capture_logs() as logs:
            _ = synchronizer.sync_once()

        assert {
            "event": "sync_applied",
            "log_level": "info",
            "created": 1,
            "modified": 0,
            "deleted": 0,
        } in logs

    def test_unavailable_store_keeps_index(self, make_spec) -> None:
        store = InMemorySpecStore.from_specs([make_spec("A", body="alpha")])
        index = SearchIndex()
        synchronizer = SpecSynchronizer(store, index)
        _ = synchronizer.sync_once()
        before = index.snapshot()
        store.available = False

        with pytest.raises(StoreUnavailableError):
            _ = synchronizer.sync_once()

        assert index.snapshot() is before

    def test_apply_change_handles_pushed_events(self, make_spec) -> None:
        store = InMemorySpecStore()
        index = SearchIndex()
        synchronizer = SpecSynchronizer(store, index)
        _ = store.subscribe(synchronizer.apply_change)

        _ = store.put(make_spec("A", body="alpha"))
        indexed_after_put = "A" in index
        _ = store.delete("A")

        assert indexed_after_put
        assert "A" not in index
        assert synchronizer.sync_once() == []

    def test_background_polling(self, make_spec) -> None:
        store = InMemorySpecStore()
        index = SearchIndex()
        synchronizer = SpecSynchronizer(store, index, interval_seconds=0.01)

        synchronizer.start()
        try:
            _ = store.put(make_spec("A", body="alpha"))
            for _ in range(500):
                if "A" in index:
                    break
                threading.Event().wait(0.01)
        finally:
            synchronizer.stop()

        assert "A" in index
        assert not synchronizer.running
        assert synchronizer.stop_event.is_set()

    def test_triggers_cause_immediate_sync(self, make_spec) -> None:
        store = InMemorySpecStore.from_specs([make_spec("A", body="alpha")])
        index = SearchIndex()
        synchronizer = SpecSynchronizer(store, index, interval_seconds=3600)
        synced = threading.Event()

        def triggers():
            yield ["modified: a.md"]
            synced.set()

        synchronizer.start(triggers())
        try:
            assert synced.wait(5)
        finally:
            synchronizer.stop()

        assert "A" in index

    def test_background_sync_logs_unavailable_store(self, make_spec) -> None:
        store = InMemorySpecStore(available=False)
        synchronizer = SpecSynchronizer(store, SearchIndex(), interval_seconds=3600)
        done = threading.Event()

        def triggers():
            yield ["modified: a.md"]
            done.set()

        with capture_logs() as logs:
            synchronizer.start(triggers())
            try:
                assert done.wait(5)
            finally:
                synchronizer.stop()

        assert any(log["event"] == "sync_store_unavailable" for log in logs)

    def test_polling_survives_unexpected_error(self, make_spec) -> None:
        class FlakyStore:
            def __init__(self, inner: InMemorySpecStore) -> None:
                self.inner = inner
                self.failures = 1

            def list_all(self):
                if self.failures:
                    self.failures -= 1
                    msg = "month must be in 1..12"
                    raise ValueError(msg)
                return self.inner.list_all()

            def get(self, spec_id: str):
                return self.inner.get(spec_id)

        store = FlakyStore(InMemorySpecStore.from_specs([make_spec("A", body="alpha")]))
        index = SearchIndex()
        synchronizer = SpecSynchronizer(store, index, interval_seconds=0.01)

        with capture_logs() as logs:
            synchronizer.start()
            try:
                for _ in range(500):
                    if "A" in index:
                        break
                    threading.Event().wait(0.01)
                alive = synchronizer.running
            finally:
                synchronizer.stop()

        assert "A" in index
        assert alive
        assert any(
            log["event"] == "sync_failed" and log["log_level"] == "error"
            for log in logs
        )

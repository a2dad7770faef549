"""Shared test fixtures for SpecKeep tests."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pendulum
import pytest
from rich.console import Console

from speckeep.spec import Spec, SpecStatus
from speckeep.store import InMemorySpecStore

SpecFactory = Callable[..., Spec]


def timestamp(offset: int) -> datetime:
    """A fixed UTC timestamp ``offset`` seconds after a common base."""
    return pendulum.datetime(2024, 1, 1, tz="UTC").add(seconds=offset)


@pytest.fixture
def make_spec() -> SpecFactory:
    """Return a factory function to create Specs with defaults."""

    def _make(
        spec_id: str = "SPEC-001",
        title: str = "",
        body: str = "",
        *,
        status: SpecStatus = SpecStatus.DRAFT,
        updated: int = 0,
        tags: frozenset[str] | set[str] = frozenset(),
    ) -> Spec:
        return Spec(
            id=spec_id,
            title=title,
            body=body,
            status=status,
            updated_at=timestamp(updated),
            tags=frozenset(tags),
        )

    return _make


@pytest.fixture
def memory_store() -> InMemorySpecStore:
    return InMemorySpecStore()


@pytest.fixture
def console() -> Console:
    """Create a Rich console for testing with no color."""
    return Console(force_terminal=False, no_color=True, width=120)


@pytest.fixture
def spec_dir(tmp_path: Path) -> Path:
    """An empty spec directory."""
    root = tmp_path / "specs"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user config and SPECKEEP_ variables out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SPECKEEP_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "speckeep.config._discovery.get_user_config_path",
        lambda: tmp_path / "user-config" / "config.toml",
    )

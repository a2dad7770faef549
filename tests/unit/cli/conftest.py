from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from speckeep.cli import create_app

CliRunner = Callable[..., int]


@pytest.fixture
def speckeep_cli(console: Console) -> CliRunner:
    """Run the CLI through its meta app and return the exit code."""
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A config file pointing at a small spec directory."""
    specs = tmp_path / "specs"
    specs.mkdir()
    _ = (specs / "cache.md").write_text(
        "---\n"
        "id: SPEC-001\n"
        "title: Implement caching layer\n"
        "status: active\n"
        "updated_at: 2024-01-01T00:00:10Z\n"
        "---\n"
        "Add a read-through cache in front of the database.\n",
        encoding="utf-8",
    )
    _ = (specs / "evict.md").write_text(
        "---\n"
        "id: SPEC-002\n"
        "title: Caching eviction policy\n"
        "status: done\n"
        "depends_on: [SPEC-001]\n"
        "updated_at: 2024-01-01T00:00:20Z\n"
        "---\n"
        "Least recently used eviction.\n",
        encoding="utf-8",
    )
    config = tmp_path / "speckeep.toml"
    _ = config.write_text(f'[store]\npath = "{specs.as_posix()}"\n', encoding="utf-8")
    return config

"""Spec store adapters and index synchronization."""

from speckeep.store._filesystem import FileSystemSpecStore, spec_from_markdown
from speckeep.store._frontmatter import parse_frontmatter
from speckeep.store._memory import ChangeListener, InMemorySpecStore
from speckeep.store._protocol import SpecStore
from speckeep.store._sync import DEFAULT_SYNC_INTERVAL, SpecSynchronizer, diff_snapshots
from speckeep.store._watcher import format_change, is_spec_file, watch_spec_files

__all__ = [
    "DEFAULT_SYNC_INTERVAL",
    "ChangeListener",
    "FileSystemSpecStore",
    "InMemorySpecStore",
    "SpecStore",
    "SpecSynchronizer",
    "diff_snapshots",
    "format_change",
    "is_spec_file",
    "parse_frontmatter",
    "spec_from_markdown",
    "watch_spec_files",
]

"""File watcher for markdown spec directories using watchfiles.

Yields batches of changed spec files so the synchronizer can re-sync sooner
than its polling interval.
"""

import threading
from collections.abc import Iterator
from pathlib import Path

from watchfiles import Change, watch


def format_change(change: Change, path: str) -> str:
    """Format a file change event as a string.

    Args:
        change: The type of change (added, modified, deleted).
        path: The path to the changed file.

    Returns:
        A formatted string describing the change.
    """
    change_names = {
        Change.added: "added",
        Change.modified: "modified",
        Change.deleted: "deleted",
    }
    change_name = change_names.get(change, "unknown")
    return f"{change_name}: {path}"


def is_spec_file(_change: Change, changed_path: str) -> bool:
    """Filter function for watchfiles: only markdown files, no dotfiles."""
    path = Path(changed_path)
    return path.suffix == ".md" and not any(
        part.startswith(".") for part in path.parts
    )


def watch_spec_files(
    root: Path,
    *,
    stop_event: threading.Event,
    debounce_ms: int = 300,
) -> Iterator[list[str]]:
    """Watch a spec directory and yield batches of formatted changes.

    Blocks between batches. Returns once ``stop_event`` is set.

    Args:
        root: The spec directory to watch.
        stop_event: Event that ends the watch when set.
        debounce_ms: Time to group changes into one batch.

    Yields:
        Lists of formatted change descriptions, one list per batch.

    Raises:
        FileNotFoundError: If the root does not exist.
    """
    root = root.resolve()

    def _accept(change: Change, changed_path: str) -> bool:
        # Judge dotted directories below the root only
        path = Path(changed_path)
        relative = path.relative_to(root) if path.is_relative_to(root) else path
        return is_spec_file(change, str(relative))

    for changes in watch(
        root,
        watch_filter=_accept,
        debounce=debounce_ms,
        stop_event=stop_event,
        recursive=True,
    ):
        yield sorted(format_change(change, path) for change, path in changes)

# pyright: reportAny=false
"""Spec store reading markdown files with YAML frontmatter.

Layout under the root directory, one spec per file:

- ``<root>/<id>.md``
- ``<root>/<id>/README.md``

Recognized frontmatter keys are ``id``, ``title``, ``status``, ``tags``,
``depends_on``, ``related`` and ``updated_at`` (or ``updated``). Missing IDs
default to the file or folder name, missing titles to the first level-one
heading, missing timestamps to the file modification time.
"""

from collections.abc import Iterator, Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Final

import pendulum
import structlog
from structlog.typing import FilteringBoundLogger

from speckeep.exceptions import SpecNotFoundError, StoreUnavailableError
from speckeep.spec._models import RelationKind, Spec, SpecStatus, relation_tag
from speckeep.store._frontmatter import (
    YAMLFrontmatter,
    YAMLValue,
    has_frontmatter,
    parse_frontmatter,
)

__all__ = ["FileSystemSpecStore", "spec_from_markdown"]

SPEC_README: Final = "README.md"

# Status spellings used by older spec files
_STATUS_ALIASES: Final[dict[str, SpecStatus]] = {
    "planned": SpecStatus.DRAFT,
    "in-progress": SpecStatus.ACTIVE,
    "in_progress": SpecStatus.ACTIVE,
    "complete": SpecStatus.DONE,
    "completed": SpecStatus.DONE,
}

_RELATION_KEYS: Final[dict[str, RelationKind]] = {
    "depends_on": RelationKind.DEPENDS_ON,
    "dependsOn": RelationKind.DEPENDS_ON,
    "related": RelationKind.RELATED_TO,
}


def _string_list(value: YAMLValue) -> list[str]:
    """Normalize a comma-separated string or list of tags into strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _id_list(value: YAMLValue) -> list[str]:
    """Normalize relation targets; a scalar is a single spec ID."""
    if isinstance(value, list):
        return _string_list(value)
    if value is None or not str(value).strip():
        return []
    return [str(value).strip()]


def _parse_status(value: YAMLValue) -> SpecStatus | None:
    if value is None:
        return SpecStatus.DRAFT
    text = str(value).strip().lower()
    try:
        return SpecStatus(text)
    except ValueError:
        return _STATUS_ALIASES.get(text)


def _parse_timestamp(value: object) -> datetime | None:
    """Parse a frontmatter timestamp into an aware datetime."""
    if isinstance(value, datetime):
        return pendulum.instance(value)
    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            parsed = pendulum.parse(value.strip())
        except ValueError:
            return None
        if isinstance(parsed, datetime):
            return parsed
        if isinstance(parsed, date):
            return pendulum.datetime(parsed.year, parsed.month, parsed.day)
    return None


def _first_heading(body: str) -> str | None:
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip() or None
    return None


def spec_from_markdown(
    content: str,
    *,
    default_id: str,
    fallback_updated_at: datetime,
) -> Spec | None:
    """Build a spec from markdown content.

    Args:
        content: Markdown with optional YAML frontmatter.
        default_id: ID used when the frontmatter declares none.
        fallback_updated_at: Timestamp used when the frontmatter has none.

    Returns:
        The parsed spec, or None if the frontmatter is malformed or declares
        an unknown status.
    """
    frontmatter: YAMLFrontmatter | None
    frontmatter, body = parse_frontmatter(content)
    if frontmatter is None:
        if has_frontmatter(content):
            return None
        frontmatter = {}

    status = _parse_status(frontmatter.get("status"))
    if status is None:
        return None

    spec_id = str(frontmatter.get("id") or default_id).strip()
    title_value = frontmatter.get("title")
    title = str(title_value).strip() if title_value else _first_heading(body)

    tags = set(_string_list(frontmatter.get("tags")))
    for key, kind in _RELATION_KEYS.items():
        tags.update(
            relation_tag(target, kind)
            for target in _id_list(frontmatter.get(key))
        )

    updated_at = (
        _parse_timestamp(frontmatter.get("updated_at"))
        or _parse_timestamp(frontmatter.get("updated"))
        or fallback_updated_at
    )

    return Spec(
        id=spec_id,
        title=title or spec_id,
        body=body,
        status=status,
        tags=frozenset(tags),
        updated_at=updated_at,
    )


class FileSystemSpecStore:
    """Spec store over a directory of markdown files.

    Implements ``SpecStore``. Every ``list_all`` call re-reads the directory;
    change detection is left to the synchronizer.
    """

    __slots__: Final = ("_logger", "_root")

    def __init__(
        self, root: Path, *, logger: FilteringBoundLogger | None = None
    ) -> None:
        """Initialize the store.

        Args:
            root: Directory containing spec files.
            logger: Optional structured logger.
        """
        self._root: Path = root
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else structlog.get_logger(__name__)
        )

    @property
    def root(self) -> Path:
        """Directory containing spec files."""
        return self._root

    def iter_spec_files(self) -> Iterator[tuple[str, Path]]:
        """Yield (default ID, path) for every spec file under the root.

        Raises:
            StoreUnavailableError: If the root directory cannot be read.
        """
        if not self._root.is_dir():
            msg = f"Spec directory not found: {self._root}"
            raise StoreUnavailableError(msg, store=str(self._root))
        try:
            entries = sorted(self._root.iterdir())
        except OSError as e:
            msg = f"Failed to read spec directory {self._root}: {e}"
            raise StoreUnavailableError(msg, store=str(self._root), cause=e) from e

        for entry in entries:
            if entry.name.startswith("."):
                continue
            if entry.is_file() and entry.suffix == ".md":
                yield entry.stem, entry
            elif entry.is_dir() and (entry / SPEC_README).is_file():
                yield entry.name, entry / SPEC_README

    def _load(self, default_id: str, path: Path) -> Spec | None:
        try:
            content = path.read_text(encoding="utf-8")
            mtime = path.stat().st_mtime
        except UnicodeDecodeError as e:
            self._logger.warning("spec_file_skipped", path=str(path), error=str(e))
            return None
        except OSError as e:
            msg = f"Failed to read spec file {path}: {e}"
            raise StoreUnavailableError(msg, store=str(self._root), cause=e) from e

        spec = spec_from_markdown(
            content,
            default_id=default_id,
            fallback_updated_at=pendulum.from_timestamp(mtime),
        )
        if spec is None:
            self._logger.warning("spec_file_skipped", path=str(path))
        return spec

    def list_all(self) -> Sequence[Spec]:
        """Read every spec file under the root.

        Files with malformed frontmatter are skipped and logged. When two
        files declare the same ID the one read last wins.

        Raises:
            StoreUnavailableError: If the directory or a file cannot be read.
        """
        specs: dict[str, Spec] = {}
        for default_id, path in self.iter_spec_files():
            spec = self._load(default_id, path)
            if spec is None:
                continue
            if spec.id in specs:
                self._logger.warning(
                    "spec_id_duplicate", spec_id=spec.id, path=str(path)
                )
            specs[spec.id] = spec
        return tuple(specs.values())

    def get(self, spec_id: str) -> Spec:
        """Return a spec by ID.

        Raises:
            SpecNotFoundError: If no spec file declares this ID.
            StoreUnavailableError: If the directory cannot be read.
        """
        for spec in self.list_all():
            if spec.id == spec_id:
                return spec
        msg = f"Spec not found: {spec_id}"
        raise SpecNotFoundError(msg, spec_id=spec_id)

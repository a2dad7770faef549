"""Unit tests for the markdown spec store."""

from pathlib import Path

import pendulum
import pytest
from structlog.testing import capture_logs

from speckeep.exceptions import SpecNotFoundError, StoreUnavailableError
from speckeep.spec import RelationKind, SpecStatus, relation_tag
from speckeep.store import FileSystemSpecStore, SpecStore, spec_from_markdown

FALLBACK = pendulum.datetime(2020, 1, 1, tz="UTC")


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


class TestSpecFromMarkdown:
    def test_reads_frontmatter_fields(self) -> None:
        content = (
            "---\n"
            "id: SPEC-007\n"
            "title: Caching layer\n"
            "status: active\n"
            "tags: [perf, backend]\n"
            "updated_at: 2024-03-01T12:00:00Z\n"
            "---\n"
            "Body text\n"
        )

        spec = spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.id == "SPEC-007"
        assert spec.title == "Caching layer"
        assert spec.status is SpecStatus.ACTIVE
        assert spec.tags == frozenset({"perf", "backend"})
        assert spec.body == "Body text"
        assert spec.updated_at == pendulum.datetime(2024, 3, 1, 12, tz="UTC")

    def test_defaults(self) -> None:
        spec = spec_from_markdown(
            "# Heading title\n\nBody", default_id="from-name", fallback_updated_at=FALLBACK
        )

        assert spec is not None
        assert spec.id == "from-name"
        assert spec.title == "Heading title"
        assert spec.status is SpecStatus.DRAFT
        assert spec.updated_at == FALLBACK

    def test_title_falls_back_to_id(self) -> None:
        spec = spec_from_markdown("no heading", default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.title == "x"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("planned", SpecStatus.DRAFT),
            ("in-progress", SpecStatus.ACTIVE),
            ("complete", SpecStatus.DONE),
            ("Archived", SpecStatus.ARCHIVED),
        ],
    )
    def test_status_aliases(self, raw: str, expected: SpecStatus) -> None:
        content = f"---\nstatus: {raw}\n---\nBody"

        spec = spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.status is expected

    def test_unknown_status_is_rejected(self) -> None:
        content = "---\nstatus: someday\n---\nBody"

        assert (
            spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)
            is None
        )

    def test_malformed_frontmatter_is_rejected(self) -> None:
        content = "---\nid: [broken\n---\nBody"

        assert (
            spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)
            is None
        )

    def test_relation_keys_become_tags(self) -> None:
        content = "---\ndepends_on: [SPEC-001]\nrelated: [SPEC-002, SPEC-003]\n---\nBody"

        spec = spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.tags == frozenset(
            {
                relation_tag("SPEC-001", RelationKind.DEPENDS_ON),
                relation_tag("SPEC-002", RelationKind.RELATED_TO),
                relation_tag("SPEC-003", RelationKind.RELATED_TO),
            }
        )
        assert spec.declared_relations == (
            ("SPEC-001", RelationKind.DEPENDS_ON),
            ("SPEC-002", RelationKind.RELATED_TO),
            ("SPEC-003", RelationKind.RELATED_TO),
        )

    def test_scalar_relation_is_one_id(self) -> None:
        content = "---\ndepends_on: SPEC-001, SPEC-002\ntags: a, b\n---\nBody"

        spec = spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.declared_relations == (
            ("SPEC-001, SPEC-002", RelationKind.DEPENDS_ON),
        )
        assert {"a", "b"} <= spec.tags

    def test_invalid_yaml_date_is_malformed(self) -> None:
        content = "---\nupdated_at: 2024-13-45\n---\nBody"

        assert (
            spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)
            is None
        )

    def test_date_only_timestamp(self) -> None:
        content = "---\nupdated: 2024-05-06\n---\nBody"

        spec = spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.updated_at == pendulum.datetime(2024, 5, 6, tz="UTC")

    def test_unparseable_timestamp_uses_fallback(self) -> None:
        content = "---\nupdated_at: not a date\n---\nBody"

        spec = spec_from_markdown(content, default_id="x", fallback_updated_at=FALLBACK)

        assert spec is not None
        assert spec.updated_at == FALLBACK


class TestFileSystemSpecStore:
    def test_implements_protocol(self, spec_dir: Path) -> None:
        assert isinstance(FileSystemSpecStore(spec_dir), SpecStore)

    def test_reads_flat_and_folder_layouts(self, spec_dir: Path) -> None:
        _ = _write(spec_dir / "flat.md", "# Flat spec\n\nBody one")
        _ = _write(spec_dir / "folder" / "README.md", "# Folder spec\n\nBody two")
        _ = _write(spec_dir / "notes.txt", "ignored")
        _ = _write(spec_dir / ".hidden.md", "# Hidden")
        (spec_dir / "empty-folder").mkdir()
        store = FileSystemSpecStore(spec_dir)

        specs = {spec.id: spec for spec in store.list_all()}

        assert sorted(specs) == ["flat", "folder"]
        assert specs["folder"].title == "Folder spec"

    def test_get(self, spec_dir: Path) -> None:
        _ = _write(spec_dir / "a.md", "---\nid: SPEC-A\n---\nBody")
        store = FileSystemSpecStore(spec_dir)

        assert store.get("SPEC-A").body == "Body"
        with pytest.raises(SpecNotFoundError):
            _ = store.get("SPEC-B")

    def test_skips_malformed_files_with_warning(self, spec_dir: Path) -> None:
        _ = _write(spec_dir / "good.md", "# Good")
        bad = _write(spec_dir / "bad.md", "---\nid: [broken\n---\nBody")
        store = FileSystemSpecStore(spec_dir)

        with capture_logs() as logs:
            specs = store.list_all()

        assert [spec.id for spec in specs] == ["good"]
        assert {"event": "spec_file_skipped", "log_level": "warning", "path": str(bad)} in logs

    def test_mtime_fallback(self, spec_dir: Path) -> None:
        path = _write(spec_dir / "a.md", "# A")
        store = FileSystemSpecStore(spec_dir)

        spec = store.get("a")

        assert spec.updated_at.timestamp() == pytest.approx(path.stat().st_mtime)

    def test_missing_root_is_unavailable(self, tmp_path: Path) -> None:
        store = FileSystemSpecStore(tmp_path / "nope")

        with pytest.raises(StoreUnavailableError) as exc_info:
            _ = store.list_all()

        assert exc_info.value.store == str(tmp_path / "nope")

    def test_skips_non_utf8_file(self, spec_dir: Path) -> None:
        _ = _write(spec_dir / "good.md", "# Good")
        bad = spec_dir / "bad.md"
        _ = bad.write_bytes(b"\xff\xfe# Bad")
        store = FileSystemSpecStore(spec_dir)

        with capture_logs() as logs:
            specs = store.list_all()

        assert [spec.id for spec in specs] == ["good"]
        skipped = [log for log in logs if log["event"] == "spec_file_skipped"]
        assert [log["path"] for log in skipped] == [str(bad)]
        assert skipped[0]["log_level"] == "warning"

    def test_skips_invalid_yaml_date(self, spec_dir: Path) -> None:
        _ = _write(spec_dir / "good.md", "# Good")
        bad = _write(spec_dir / "bad.md", "---\nupdated_at: 2024-13-45\n---\nBody")
        store = FileSystemSpecStore(spec_dir)

        with capture_logs() as logs:
            specs = store.list_all()

        assert [spec.id for spec in specs] == ["good"]
        assert {"event": "spec_file_skipped", "log_level": "warning", "path": str(bad)} in logs

# pyright: reportAny=false
"""In-memory inverted index over spec titles and bodies.

Mutations are serialized by a writer lock and never touch the published
snapshot: each ``upsert``/``remove`` builds a new ``IndexSnapshot`` and
publishes it with a single reference assignment. Readers take the current
snapshot without locking and keep a consistent view for as long as they hold
it, so a spec update is either fully visible or not visible at all.
"""

import threading
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

import structlog
from structlog.typing import FilteringBoundLogger

from speckeep.search._tokenize import tokens
from speckeep.spec._models import Posting, Spec

__all__ = ["IndexSnapshot", "IndexedDocument", "SearchIndex"]


@dataclass(frozen=True, slots=True)
class IndexedDocument:
    """A spec as seen by the index.

    Attributes:
        spec: The indexed spec.
        term_counts: Occurrences of each token across title and body.
    """

    spec: Spec
    term_counts: Mapping[str, int]

    def term_frequency(self, token: str) -> int:
        """Return the number of occurrences of a token in the document."""
        return self.term_counts.get(token, 0)


_EMPTY_POSTINGS: Final[tuple[Posting, ...]] = ()


class IndexSnapshot:
    """Immutable, fully committed state of a search index."""

    __slots__: Final = ("_doc_frequency", "_documents", "_postings")

    _documents: Mapping[str, IndexedDocument]
    _postings: Mapping[str, tuple[Posting, ...]]
    _doc_frequency: Mapping[str, int]

    def __init__(
        self,
        documents: dict[str, IndexedDocument] | None = None,
        postings: dict[str, tuple[Posting, ...]] | None = None,
        doc_frequency: dict[str, int] | None = None,
    ) -> None:
        self._documents = MappingProxyType(documents or {})
        self._postings = MappingProxyType(postings or {})
        self._doc_frequency = MappingProxyType(doc_frequency or {})

    @property
    def total_docs(self) -> int:
        """Number of indexed documents, including those with no postings."""
        return len(self._documents)

    @property
    def spec_ids(self) -> tuple[str, ...]:
        """IDs of all indexed specs in ascending order."""
        return tuple(sorted(self._documents))

    @property
    def vocabulary(self) -> frozenset[str]:
        """All tokens with at least one posting."""
        return frozenset(self._postings)

    def document(self, spec_id: str) -> IndexedDocument | None:
        """Return the indexed document for a spec ID, if present."""
        return self._documents.get(spec_id)

    def postings(self, token: str) -> tuple[Posting, ...]:
        """Return the postings for a token, sorted by spec ID."""
        return self._postings.get(token, _EMPTY_POSTINGS)

    def doc_frequency(self, token: str) -> int:
        """Return the number of documents containing a token."""
        return self._doc_frequency.get(token, 0)

    def __contains__(self, spec_id: object) -> bool:
        return spec_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexSnapshot):
            return NotImplemented
        return (
            dict(self._documents) == dict(other._documents)
            and dict(self._postings) == dict(other._postings)
            and dict(self._doc_frequency) == dict(other._doc_frequency)
        )

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def __repr__(self) -> str:
        return (
            f"IndexSnapshot(total_docs={self.total_docs}, "
            f"vocabulary={len(self._postings)})"
        )


def _postings_for(spec: Spec) -> tuple[dict[str, list[Posting]], Counter[str]]:
    """Tokenize a spec's indexed fields into per-token postings."""
    by_token: dict[str, list[Posting]] = {}
    counts: Counter[str] = Counter()
    for field_name, text in (("title", spec.title), ("body", spec.body)):
        for position, token in enumerate(tokens(text)):
            by_token.setdefault(token, []).append(
                Posting(spec_id=spec.id, field=field_name, position=position)  # pyright: ignore[reportArgumentType]
            )
            counts[token] += 1
    return by_token, counts


def _drop_document(
    postings: dict[str, tuple[Posting, ...]],
    doc_frequency: dict[str, int],
    document: IndexedDocument,
) -> None:
    """Remove every posting of a document from working copies of the maps."""
    spec_id = document.spec.id
    for token in document.term_counts:
        remaining = tuple(p for p in postings[token] if p.spec_id != spec_id)
        if remaining:
            postings[token] = remaining
            doc_frequency[token] -= 1
        else:
            del postings[token]
            del doc_frequency[token]


def _add_document(
    documents: dict[str, IndexedDocument],
    postings: dict[str, tuple[Posting, ...]],
    doc_frequency: dict[str, int],
    spec: Spec,
) -> int:
    """Add a spec to working copies of the maps, returning its token count."""
    by_token, counts = _postings_for(spec)
    for token, new_postings in by_token.items():
        postings[token] = tuple(sorted((*postings.get(token, ()), *new_postings)))
        doc_frequency[token] = doc_frequency.get(token, 0) + 1
    documents[spec.id] = IndexedDocument(
        spec=spec, term_counts=MappingProxyType(dict(counts))
    )
    return counts.total()


class SearchIndex:
    """Inverted index from normalized token to postings.

    Single writer, many readers: ``upsert``, ``remove`` and ``rebuild`` are
    serialized; ``snapshot`` never blocks.
    """

    __slots__: Final = ("_lock", "_logger", "_snapshot")

    _lock: threading.Lock
    _logger: FilteringBoundLogger
    _snapshot: IndexSnapshot

    def __init__(self, *, logger: FilteringBoundLogger | None = None) -> None:
        """Initialize an empty index.

        Args:
            logger: Optional structured logger. Defaults to a module logger.
        """
        self._lock = threading.Lock()
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._snapshot = IndexSnapshot()

    def snapshot(self) -> IndexSnapshot:
        """Return the last fully committed index state."""
        return self._snapshot

    def upsert(self, spec: Spec) -> None:
        """Insert or replace the entry for a spec.

        Re-tokenizes the title and body. A spec with empty text still gets an
        entry; it is counted as a document but has no postings.

        Args:
            spec: The spec to index.
        """
        with self._lock:
            current = self._snapshot
            existing = current.document(spec.id)
            if existing is not None and existing.spec == spec:
                return

            documents = dict(current._documents)  # noqa: SLF001
            postings = dict(current._postings)  # noqa: SLF001
            doc_frequency = dict(current._doc_frequency)  # noqa: SLF001

            if existing is not None:
                _drop_document(postings, doc_frequency, existing)
            token_count = _add_document(documents, postings, doc_frequency, spec)

            self._snapshot = IndexSnapshot(documents, postings, doc_frequency)

        self._logger.debug(
            "index_upsert",
            spec_id=spec.id,
            tokens=token_count,
            replaced=existing is not None,
        )

    def remove(self, spec_id: str) -> bool:
        """Delete all postings for a spec.

        Args:
            spec_id: ID of the spec to remove.

        Returns:
            True if the spec was indexed, False otherwise.
        """
        with self._lock:
            current = self._snapshot
            existing = current.document(spec_id)
            if existing is None:
                return False

            documents = dict(current._documents)  # noqa: SLF001
            postings = dict(current._postings)  # noqa: SLF001
            doc_frequency = dict(current._doc_frequency)  # noqa: SLF001

            _drop_document(postings, doc_frequency, existing)
            del documents[spec_id]

            self._snapshot = IndexSnapshot(documents, postings, doc_frequency)

        self._logger.debug("index_remove", spec_id=spec_id)
        return True

    def rebuild(self, specs: Iterable[Spec]) -> None:
        """Replace the whole index with the given specs in one commit.

        Args:
            specs: Specs to index. Later duplicates of an ID win.
        """
        documents: dict[str, IndexedDocument] = {}
        postings: dict[str, tuple[Posting, ...]] = {}
        doc_frequency: dict[str, int] = {}

        for spec in specs:
            existing = documents.get(spec.id)
            if existing is not None:
                _drop_document(postings, doc_frequency, existing)
            _ = _add_document(documents, postings, doc_frequency, spec)

        with self._lock:
            self._snapshot = IndexSnapshot(documents, postings, doc_frequency)

        self._logger.info("index_rebuilt", documents=len(documents))

    def __contains__(self, spec_id: object) -> bool:
        return spec_id in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

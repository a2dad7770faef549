"""Specification domain models."""

from speckeep.spec._models import (
    ChangeType,
    IndexedField,
    Posting,
    ProjectContext,
    RelationKind,
    Relationship,
    SearchOptions,
    SearchResult,
    Spec,
    SpecChange,
    SpecStatus,
    parse_relation_tag,
    relation_tag,
)

__all__ = [
    "ChangeType",
    "IndexedField",
    "Posting",
    "ProjectContext",
    "RelationKind",
    "Relationship",
    "SearchOptions",
    "SearchResult",
    "Spec",
    "SpecChange",
    "SpecStatus",
    "parse_relation_tag",
    "relation_tag",
]

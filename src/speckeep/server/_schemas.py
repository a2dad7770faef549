"""Response and request bodies for the HTTP API.

JSON keys are camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from speckeep.spec import ProjectContext, Relationship, SearchResult, Spec, SpecStatus


class _CamelModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class HealthResponse(_CamelModel):
    status: str
    version: str


class ErrorResponse(_CamelModel):
    error: str


class RelationshipResponse(_CamelModel):
    spec_id: str
    related_spec_id: str
    relation_kind: str

    @classmethod
    def from_relationship(cls, relationship: Relationship) -> Self:
        return cls(
            spec_id=relationship.spec_id,
            related_spec_id=relationship.related_spec_id,
            relation_kind=relationship.relation_kind.value,
        )


class ProjectContextResponse(_CamelModel):
    """Project context summary.

    Relationships are sorted so the body is deterministic.
    """

    total_specs: int
    by_status: dict[str, int]
    recently_updated: list[str]
    relationships: list[RelationshipResponse]

    @classmethod
    def from_context(cls, context: ProjectContext) -> Self:
        return cls(
            total_specs=context.total_specs,
            by_status={status.value: n for status, n in context.by_status.items()},
            recently_updated=list(context.recently_updated),
            relationships=[
                RelationshipResponse.from_relationship(r)
                for r in sorted(context.relationships)
            ],
        )


class SearchRequest(_CamelModel):
    query: str = ""
    limit: int | None = None
    status_filter: SpecStatus | None = None


class SearchResultResponse(_CamelModel):
    spec_id: str
    score: float
    snippet: str
    highlight_spans: list[tuple[int, int]] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: SearchResult) -> Self:
        return cls(
            spec_id=result.spec_id,
            score=result.score,
            snippet=result.snippet,
            highlight_spans=list(result.highlight_spans),
        )


class SearchResponse(_CamelModel):
    query: str
    results: list[SearchResultResponse]


class SpecResponse(_CamelModel):
    id: str
    title: str
    body: str
    status: SpecStatus
    tags: list[str]
    updated_at: datetime

    @classmethod
    def from_spec(cls, spec: Spec) -> Self:
        return cls(
            id=spec.id,
            title=spec.title,
            body=spec.body,
            status=spec.status,
            tags=sorted(spec.tags),
            updated_at=spec.updated_at,
        )

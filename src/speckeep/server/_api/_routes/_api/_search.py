from typing import Annotated

from fastapi import APIRouter, Query

from speckeep.server._dependencies import Services
from speckeep.server._schemas import (
    ErrorResponse,
    SearchRequest,
    SearchResponse,
    SearchResultResponse,
)
from speckeep.services import SpecServices
from speckeep.spec import SearchOptions, SpecStatus

router = APIRouter(prefix="", tags=["search"])


def _run_search(services: SpecServices, request: SearchRequest) -> SearchResponse:
    options = SearchOptions(
        limit=(
            request.limit
            if request.limit is not None
            else services.query_engine.default_limit
        ),
        status_filter=request.status_filter,
    )
    results = services.query_engine.search(request.query, options)
    return SearchResponse(
        query=request.query,
        results=[SearchResultResponse.from_result(r) for r in results],
    )


@router.get("/search", responses={422: {"model": ErrorResponse}})
def get_search(
    services: Services,
    query: str = "",
    limit: Annotated[int | None, Query()] = None,
    status: Annotated[SpecStatus | None, Query()] = None,
) -> SearchResponse:
    return _run_search(
        services, SearchRequest(query=query, limit=limit, status_filter=status)
    )


@router.post("/search", responses={422: {"model": ErrorResponse}})
def post_search(services: Services, body: SearchRequest) -> SearchResponse:
    return _run_search(services, body)

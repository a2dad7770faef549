from fastapi import APIRouter

from speckeep.server._dependencies import Services
from speckeep.server._schemas import ErrorResponse, ProjectContextResponse

router = APIRouter(prefix="", tags=["context"])


@router.get("/context", responses={500: {"model": ErrorResponse}})
def get_context(services: Services) -> ProjectContextResponse:
    """Return the project context summary.

    Reads the store on every request. Store failures become a 500 through
    the application's exception handlers.
    """
    context = services.aggregator.compute_context()
    return ProjectContextResponse.from_context(context)

from fastapi import APIRouter

from speckeep.server._dependencies import Services
from speckeep.server._schemas import ErrorResponse, SpecResponse

router = APIRouter(prefix="/specs", tags=["specs"])


@router.get("/{spec_id}", responses={404: {"model": ErrorResponse}})
def get_spec(spec_id: str, services: Services) -> SpecResponse:
    return SpecResponse.from_spec(services.store.get(spec_id))

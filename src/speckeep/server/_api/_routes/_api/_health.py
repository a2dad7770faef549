from fastapi import APIRouter

from speckeep.server._schemas import HealthResponse
from speckeep.utils import get_version

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
async def get_health() -> HealthResponse:
    return HealthResponse(status="ok", version=get_version())

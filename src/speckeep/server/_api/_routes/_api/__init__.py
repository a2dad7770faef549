from fastapi import APIRouter

from ._context import router as context_router
from ._health import router as health_router
from ._search import router as search_router
from ._specs import router as specs_router

router = APIRouter(prefix="/api")

router.include_router(health_router)
router.include_router(context_router)
router.include_router(search_router)
router.include_router(specs_router)

from fastapi import APIRouter

from mind_mirror.analysis_api.routes.analyse import router as analyse_router
from mind_mirror.analysis_api.routes.models import router as models_router
from mind_mirror.analysis_api.routes.root import router as root_router

router = APIRouter()

router.include_router(
    analyse_router,
    tags=["analysis"],
)

router.include_router(
    models_router,
    tags=["models"],
)

__all__ = ["router", "root_router"]

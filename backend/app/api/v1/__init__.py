from fastapi import APIRouter, Depends

from app.api.v1.assets import router as assets_router
from app.api.v1.filters import router as filters_router
from app.api.v1.labels import router as labels_router
from app.api.v1.lookups import (
    categories_router,
    locations_router,
    manufacturers_router,
    suppliers_router,
)
from app.api.v1.settings import router as settings_router
from app.core.dependencies import require_auth

router = APIRouter(dependencies=[Depends(require_auth)])
router.include_router(categories_router)
router.include_router(manufacturers_router)
router.include_router(suppliers_router)
router.include_router(locations_router)
router.include_router(filters_router)
router.include_router(settings_router)
router.include_router(assets_router)
router.include_router(labels_router)

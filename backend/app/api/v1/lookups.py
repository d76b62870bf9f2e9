"""
Lookup table endpoints: categories, manufacturers, suppliers, locations.

All four tables expose the same list/create/update/delete routes, so one
router is built per table from its schemas.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.common import SuccessResponse
from app.schemas.lookup import (
    CategoryCreate,
    CategoryInDB,
    CategoryUpdate,
    LocationCreate,
    LocationInDB,
    LocationUpdate,
    ManufacturerCreate,
    ManufacturerInDB,
    ManufacturerUpdate,
    SupplierCreate,
    SupplierInDB,
    SupplierUpdate,
)
from app.services.lookup_service import (
    CATEGORIES,
    LOCATIONS,
    MANUFACTURERS,
    SUPPLIERS,
    LookupKind,
    create_lookup,
    delete_lookup,
    list_lookups,
    update_lookup,
)


def build_lookup_router(
    kind: LookupKind,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=f"/{kind.plural}", tags=[kind.plural])

    @router.get("", response_model=list[response_schema], name=f"list_{kind.plural}")
    async def list_records(db: AsyncSession = Depends(get_db)):
        return await list_lookups(db, kind)

    @router.post("", response_model=response_schema, status_code=201, name=f"create_{kind.noun}")
    async def create_record(data: create_schema, db: AsyncSession = Depends(get_db)):
        return await create_lookup(db, kind, data)

    @router.put("/{record_id}", response_model=response_schema, name=f"update_{kind.noun}")
    async def update_record(record_id: UUID, data: update_schema, db: AsyncSession = Depends(get_db)):
        return await update_lookup(db, kind, record_id, data)

    @router.delete("/{record_id}", response_model=SuccessResponse, name=f"delete_{kind.noun}")
    async def delete_record(record_id: UUID, db: AsyncSession = Depends(get_db)):
        await delete_lookup(db, kind, record_id)
        return SuccessResponse()

    return router


categories_router = build_lookup_router(CATEGORIES, CategoryCreate, CategoryUpdate, CategoryInDB)
manufacturers_router = build_lookup_router(MANUFACTURERS, ManufacturerCreate, ManufacturerUpdate, ManufacturerInDB)
suppliers_router = build_lookup_router(SUPPLIERS, SupplierCreate, SupplierUpdate, SupplierInDB)
locations_router = build_lookup_router(LOCATIONS, LocationCreate, LocationUpdate, LocationInDB)

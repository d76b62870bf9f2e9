"""
Saved asset-list filters.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.common import SuccessResponse
from app.schemas.saved_filter import SavedFilterCreate, SavedFilterInDB
from app.services.saved_filter_service import create_filter, delete_filter, list_filters

router = APIRouter(prefix="/filters", tags=["filters"])


@router.get("", response_model=list[SavedFilterInDB])
async def list_saved_filters(db: AsyncSession = Depends(get_db)):
    return await list_filters(db)


@router.post("", response_model=SavedFilterInDB, status_code=201)
async def create_saved_filter(data: SavedFilterCreate, db: AsyncSession = Depends(get_db)):
    return await create_filter(db, data)


@router.delete("/{filter_id}", response_model=SuccessResponse)
async def delete_saved_filter(filter_id: UUID, db: AsyncSession = Depends(get_db)):
    await delete_filter(db, filter_id)
    return SuccessResponse()

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.bulk import BulkUpdateRequest, BulkUpdateResponse
from app.services.bulk_update_service import bulk_update_assets

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post("/bulk-update", response_model=BulkUpdateResponse)
async def bulk_update(body: BulkUpdateRequest, db: AsyncSession = Depends(get_db)):
    """Apply the supplied fields to each asset; per-asset failures are reported, not raised."""
    changes = body.fields.model_dump(exclude_unset=True)
    result = await bulk_update_assets(db, body.ids, changes)
    return result.to_dict()

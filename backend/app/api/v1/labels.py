"""
Asset label endpoints: default options, QR preview, PDF download, printing.
"""
import uuid

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_settings_store
from app.schemas.label import LabelOptions, LabelOptionsOverride, PrintLabelRequest, PrintLabelResponse
from app.services.label_service import (
    build_label_pdf,
    build_label_preview,
    load_label_settings,
    print_label,
    save_label_settings,
)
from app.services.settings_store import SettingsStore

router = APIRouter(prefix="/labels", tags=["labels"])


@router.get("/settings", response_model=LabelOptions)
async def get_label_settings(store: SettingsStore = Depends(get_settings_store)):
    return await load_label_settings(store)


@router.put("/settings", response_model=LabelOptions)
async def update_label_settings(body: LabelOptionsOverride, store: SettingsStore = Depends(get_settings_store)):
    return await save_label_settings(store, body)


@router.get("/{asset_id}/preview")
async def preview_label(asset_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    png = await build_label_preview(db, asset_id)
    return Response(content=png, media_type="image/png", headers={"Cache-Control": "no-cache"})


@router.get("/{asset_id}/download")
async def download_label(
    asset_id: uuid.UUID,
    show_assigned_to: bool | None = Query(None, alias="showAssignedTo"),
    show_model: bool | None = Query(None, alias="showModel"),
    show_serial_number: bool | None = Query(None, alias="showSerialNumber"),
    db: AsyncSession = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
):
    overrides = LabelOptionsOverride(
        show_assigned_to=show_assigned_to,
        show_model=show_model,
        show_serial_number=show_serial_number,
    )
    asset, pdf = await build_label_pdf(db, store, asset_id, overrides)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="label-{asset.item_number}.pdf"'},
    )


@router.post("/{asset_id}/print", response_model=PrintLabelResponse)
async def print_asset_label(
    asset_id: uuid.UUID,
    body: PrintLabelRequest,
    db: AsyncSession = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
):
    overrides = LabelOptionsOverride.model_validate(body.model_dump(exclude={"copies"}))
    return await print_label(db, store, asset_id, body.copies, overrides)

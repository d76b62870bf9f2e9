"""Asset label options, content and printing.

Stored defaults live in the settings table; a caller's per-print overrides
win over them field by field, and before defaults exist every option is on.
"""
import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import NotFoundError, infrastructure_guard
from app.models.asset import Asset
from app.schemas.label import LabelOptions, LabelOptionsOverride
from app.services.label_render import generate_label_pdf, generate_qr_png, generate_zpl, send_zpl
from app.services.settings_store import ORGANIZATION_KEY, SettingsStore

logger = logging.getLogger(__name__)

MIN_COPIES = 1
MAX_COPIES = 100

LABEL_SETTING_KEYS = {
    "show_assigned_to": "label.show_assigned_to",
    "show_model": "label.show_model",
    "show_serial_number": "label.show_serial_number",
}

BASELINE_OPTIONS = LabelOptions(show_assigned_to=True, show_model=True, show_serial_number=True)


def resolve_label_options(
    defaults: LabelOptions | None,
    overrides: LabelOptionsOverride | dict | None = None,
) -> LabelOptions:
    base = defaults or BASELINE_OPTIONS
    if overrides is None:
        overrides = {}
    elif isinstance(overrides, LabelOptionsOverride):
        overrides = overrides.model_dump()
    else:
        overrides = LabelOptionsOverride.model_validate(overrides).model_dump()

    resolved = {}
    for name in LabelOptions.model_fields:
        value = overrides.get(name)
        resolved[name] = getattr(base, name) if value is None else bool(value)
    return LabelOptions(**resolved)


def toggle_option(options: LabelOptions, name: str) -> LabelOptions:
    if name not in LabelOptions.model_fields:
        raise KeyError(name)
    return options.model_copy(update={name: not getattr(options, name)})


def clamp_copies(value: Any) -> int:
    """Coerce to an int in [1, 100]; unparseable input counts as 1."""
    try:
        copies = int(value)
    except (TypeError, ValueError):
        return MIN_COPIES
    return max(MIN_COPIES, min(MAX_COPIES, copies))


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in ("true", "1", "yes", "on")


async def load_label_settings(store: SettingsStore) -> LabelOptions:
    stored = await store.get_many(list(LABEL_SETTING_KEYS.values()))
    values = {
        name: _parse_flag(stored[key]) if key in stored else True
        for name, key in LABEL_SETTING_KEYS.items()
    }
    return LabelOptions(**values)


async def save_label_settings(store: SettingsStore, changes: LabelOptionsOverride) -> LabelOptions:
    """Persist only the flags present in ``changes``."""
    for name, value in changes.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        await store.set(LABEL_SETTING_KEYS[name], "true" if value else "false")
    return await load_label_settings(store)


def _label_body(asset: Asset, options: LabelOptions) -> list[str]:
    lines = []
    if options.show_assigned_to and asset.assigned_to:
        lines.append(asset.assigned_to)
    lines.append(f"Item:{asset.item_number}")
    if options.show_model and asset.model:
        manufacturer = asset.manufacturer.name if asset.manufacturer else ""
        lines.append(f"{manufacturer} {asset.model}".strip())
    if options.show_serial_number and asset.serial_number:
        lines.append(f"S/N:{asset.serial_number}")
    return lines


def render_label_fields(asset: Asset, options: LabelOptions, organization: str = "") -> list[str]:
    """Label lines in print order, ending with the organization footer when one is set."""
    lines = _label_body(asset, options)
    if organization:
        lines.append(organization)
    return lines


def asset_qr_data(asset: Asset) -> str:
    return f"{settings.APP_PUBLIC_URL.rstrip('/')}/assets/{asset.id}"


async def get_label_asset(db: AsyncSession, asset_id: uuid.UUID) -> Asset:
    stmt = (
        select(Asset)
        .options(selectinload(Asset.manufacturer))
        .where(Asset.id == asset_id)
        .execution_options(populate_existing=True)
    )
    with infrastructure_guard("Failed to fetch asset"):
        result = await db.execute(stmt)
    asset = result.scalar_one_or_none()
    if asset is None:
        raise NotFoundError("Asset not found")
    return asset


async def _prepare(
    db: AsyncSession, store: SettingsStore, asset_id: uuid.UUID, overrides: LabelOptionsOverride | dict | None
) -> tuple[Asset, list[str], str]:
    asset = await get_label_asset(db, asset_id)
    options = resolve_label_options(await load_label_settings(store), overrides)
    organization = await store.get(ORGANIZATION_KEY)
    return asset, _label_body(asset, options), organization


async def build_label_preview(db: AsyncSession, asset_id: uuid.UUID) -> bytes:
    asset = await get_label_asset(db, asset_id)
    return generate_qr_png(asset_qr_data(asset))


async def build_label_pdf(
    db: AsyncSession, store: SettingsStore, asset_id: uuid.UUID, overrides: LabelOptionsOverride | dict | None = None
) -> tuple[Asset, bytes]:
    asset, lines, organization = await _prepare(db, store, asset_id, overrides)
    return asset, generate_label_pdf(asset_qr_data(asset), lines, organization or None)


async def print_label(
    db: AsyncSession,
    store: SettingsStore,
    asset_id: uuid.UUID,
    copies: Any = 1,
    overrides: LabelOptionsOverride | dict | None = None,
) -> dict:
    """Send ``copies`` labels to the network printer.

    Out-of-range copy counts are clamped, never rejected. Printer problems
    come back as ``success: False`` rather than an HTTP error.
    """
    copies = clamp_copies(copies)
    asset, lines, organization = await _prepare(db, store, asset_id, overrides)

    if not settings.label_printer_enabled:
        logger.error("LABEL_PRINTER_HOST not configured")
        return {"success": False, "message": "Label printer is not configured", "copies": copies}

    zpl = generate_zpl(asset_qr_data(asset), lines, organization or None, copies=copies)
    sent = await send_zpl(
        zpl,
        settings.LABEL_PRINTER_HOST,
        settings.LABEL_PRINTER_PORT,
        timeout=settings.LABEL_PRINTER_TIMEOUT,
    )
    if not sent:
        return {"success": False, "message": "Failed to send label to printer", "copies": copies}

    noun = "label" if copies == 1 else "labels"
    logger.info("Printed %d %s for asset %s", copies, noun, asset.item_number)
    return {"success": True, "message": f"Sent {copies} {noun} for item {asset.item_number} to printer", "copies": copies}

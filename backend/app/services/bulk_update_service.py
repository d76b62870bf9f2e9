"""Bulk asset field updates with per-asset isolation.

Each asset is updated and committed on its own. A failure on one id is
recorded and the loop moves on; nothing already applied is rolled back, and
if the request is aborted midway the assets committed so far keep their new
values. There is no transaction spanning the whole batch.

The service only applies what the change set contains. Callers that want a
decommission date alongside a "Decommissioned - ..." status must send it
(see ``app.services.change_set.build_change_set``).
"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError, infrastructure_guard
from app.models.asset import ASSET_STATUSES, Asset, AssetCondition
from app.models.category import Category
from app.models.location import Location

logger = logging.getLogger(__name__)

BULK_FIELDS = ("status", "condition", "category_id", "location_id", "decommission_date", "comments")

_REFERENCES = {
    "category_id": (Category, "Category"),
    "location_id": (Location, "Location"),
}


@dataclass(frozen=True)
class AssetUpdated:
    asset_id: str


@dataclass(frozen=True)
class AssetUpdateFailed:
    asset_id: str
    message: str


BulkItemResult = AssetUpdated | AssetUpdateFailed


@dataclass
class BulkUpdateResult:
    """Ordered per-asset outcomes; counts are derived, never tracked separately."""

    items: list[BulkItemResult] = field(default_factory=list)

    def add(self, item: BulkItemResult) -> None:
        self.items.append(item)

    @property
    def updated(self) -> int:
        return sum(1 for item in self.items if isinstance(item, AssetUpdated))

    @property
    def failed(self) -> int:
        return len(self.items) - self.updated

    @property
    def errors(self) -> list[AssetUpdateFailed]:
        return [item for item in self.items if isinstance(item, AssetUpdateFailed)]

    def to_dict(self) -> dict:
        return {
            "updated": self.updated,
            "failed": self.failed,
            "errors": [{"id": e.asset_id, "message": e.message} for e in self.errors],
        }


def _parse_uuid(value: Any) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError):
        return None


def _parse_date(value: Any) -> tuple[date | None, bool]:
    """``(parsed, ok)``; blank input parses to ``None``."""
    if isinstance(value, date):
        return value, True
    if value is None or not str(value).strip():
        return None, True
    try:
        return date.fromisoformat(str(value).strip()), True
    except ValueError:
        return None, False


async def _resolve_changes(db: AsyncSession, changes: dict[str, Any]) -> tuple[dict[str, Any], str | None]:
    """Validate the change set once and convert reference ids.

    Returns ``(resolved, problem)``; a non-empty ``problem`` is reported as the
    failure message for every asset that exists.
    """
    resolved = dict(changes)

    if "status" in changes and changes["status"] not in ASSET_STATUSES:
        return resolved, f"Invalid status: {changes['status']!r}"

    # An explicit null or "" clears the optional columns.
    if "condition" in changes:
        valid_conditions = {c.value for c in AssetCondition}
        if not changes["condition"]:
            resolved["condition"] = None
        elif changes["condition"] not in valid_conditions:
            return resolved, f"Invalid condition: {changes['condition']!r}"

    if "decommission_date" in changes:
        parsed, ok = _parse_date(changes["decommission_date"])
        if not ok:
            return resolved, f"Invalid decommission date: {changes['decommission_date']!r}"
        resolved["decommission_date"] = parsed

    for key, (model, label) in _REFERENCES.items():
        if key not in changes:
            continue
        if not changes[key]:
            resolved[key] = None
            continue
        ref_id = _parse_uuid(changes[key])
        if ref_id is None or await db.get(model, ref_id) is None:
            return resolved, f"{label} not found"
        resolved[key] = ref_id

    return resolved, None


async def _apply_to_asset(
    db: AsyncSession,
    raw_id: str,
    changes: dict[str, Any],
    problem: str | None,
) -> BulkItemResult:
    asset_id = _parse_uuid(raw_id)
    if asset_id is None:
        return AssetUpdateFailed(raw_id, "Asset not found")

    try:
        asset = await db.get(Asset, asset_id)
        if asset is None:
            return AssetUpdateFailed(raw_id, "Asset not found")
        if problem:
            return AssetUpdateFailed(raw_id, problem)

        for key, value in changes.items():
            setattr(asset, key, value)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Bulk update failed for asset %s: %s", raw_id, e)
        return AssetUpdateFailed(raw_id, "Update failed")

    return AssetUpdated(raw_id)


async def bulk_update_assets(db: AsyncSession, ids: list[str], changes: dict[str, Any]) -> BulkUpdateResult:
    """Apply ``changes`` to every asset in ``ids``, in order, independently.

    ``changes`` holds only the fields the caller supplied. An empty change
    set is rejected before any asset is touched.
    """
    changes = {k: v for k, v in changes.items() if k in BULK_FIELDS}
    if not changes:
        raise ValidationError("At least one field must be provided")

    with infrastructure_guard("Failed to update assets"):
        resolved, problem = await _resolve_changes(db, changes)

    result = BulkUpdateResult()
    for raw_id in ids:
        result.add(await _apply_to_asset(db, raw_id, resolved, problem))

    logger.info(
        "Bulk update of %d asset(s): %d updated, %d failed (fields: %s)",
        len(ids), result.updated, result.failed, ", ".join(sorted(changes)),
    )
    return result

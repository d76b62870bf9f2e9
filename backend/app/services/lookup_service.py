"""CRUD for the lookup tables assets point to.

Categories, manufacturers, suppliers and locations share one contract: names
are unique, lists come back sorted by name with the number of referencing
assets, and a row cannot be deleted while any asset still points at it.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.core.exceptions import (
    DuplicateError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
    infrastructure_guard,
)
from app.models.asset import Asset
from app.models.category import Category
from app.models.location import Location
from app.models.manufacturer import Manufacturer
from app.models.supplier import Supplier

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class LookupKind:
    model: type
    asset_column: InstrumentedAttribute
    label: str  # "Category"
    plural: str  # "categories"

    @property
    def noun(self) -> str:
        return self.label.lower()


CATEGORIES = LookupKind(Category, Asset.category_id, "Category", "categories")
MANUFACTURERS = LookupKind(Manufacturer, Asset.manufacturer_id, "Manufacturer", "manufacturers")
SUPPLIERS = LookupKind(Supplier, Asset.supplier_id, "Supplier", "suppliers")
LOCATIONS = LookupKind(Location, Asset.location_id, "Location", "locations")



def _asset_count_column(kind: LookupKind):
    model = kind.model
    return (
        select(func.count(Asset.id))
        .where(kind.asset_column == model.id)
        .correlate(model)
        .scalar_subquery()
        .label("asset_count")
    )


async def _count_assets(db: AsyncSession, kind: LookupKind, record_id: uuid.UUID) -> int:
    result = await db.execute(select(func.count(Asset.id)).where(kind.asset_column == record_id))
    return result.scalar() or 0


async def _name_taken(db: AsyncSession, kind: LookupKind, name: str, exclude_id: uuid.UUID | None = None) -> bool:
    stmt = select(kind.model.id).where(kind.model.name == name)
    if exclude_id is not None:
        stmt = stmt.where(kind.model.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none() is not None


async def get_lookup(db: AsyncSession, kind: LookupKind, record_id: uuid.UUID) -> Any:
    with infrastructure_guard(f"Failed to fetch {kind.noun}"):
        record = await db.get(kind.model, record_id)
    if record is None:
        raise NotFoundError(f"{kind.label} not found")
    return record


async def list_lookups(db: AsyncSession, kind: LookupKind) -> list[Any]:
    """All rows ordered by name, each carrying ``asset_count``."""
    stmt = select(kind.model, _asset_count_column(kind)).order_by(kind.model.name)
    with infrastructure_guard(f"Failed to fetch {kind.plural}"):
        result = await db.execute(stmt)
        rows = result.all()

    records = []
    for record, asset_count in rows:
        record.asset_count = asset_count or 0
        records.append(record)
    return records


async def create_lookup(db: AsyncSession, kind: LookupKind, data: BaseModel) -> Any:
    values = data.model_dump()
    if not values.get("name"):
        raise ValidationError("Name is required")

    with infrastructure_guard(f"Failed to create {kind.noun}"):
        if await _name_taken(db, kind, values["name"]):
            raise DuplicateError(f"{kind.label} already exists")

        record = kind.model(**values)
        db.add(record)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateError(f"{kind.label} already exists")
        await db.refresh(record)

    record.asset_count = 0
    logger.info("Created %s '%s'", kind.noun, record.name)
    return record


async def update_lookup(db: AsyncSession, kind: LookupKind, record_id: uuid.UUID, data: BaseModel) -> Any:
    """Apply only the fields present in the request body."""
    record = await get_lookup(db, kind, record_id)
    changes = data.model_dump(exclude_unset=True)

    with infrastructure_guard(f"Failed to update {kind.noun}"):
        if "name" in changes:
            if not changes["name"]:
                raise ValidationError("Name is required")
            if await _name_taken(db, kind, changes["name"], exclude_id=record.id):
                raise DuplicateError(f"{kind.label} name already exists")

        for field, value in changes.items():
            setattr(record, field, value)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateError(f"{kind.label} name already exists")
        await db.refresh(record)
        record.asset_count = await _count_assets(db, kind, record.id)

    return record


async def delete_lookup(db: AsyncSession, kind: LookupKind, record_id: uuid.UUID) -> None:
    record = await get_lookup(db, kind, record_id)

    with infrastructure_guard(f"Failed to delete {kind.noun}"):
        if await _count_assets(db, kind, record.id):
            raise ReferentialIntegrityError(f"Cannot delete {kind.noun} with assets")

        name = record.name
        await db.delete(record)
        try:
            await db.flush()
        except IntegrityError:
            # An asset was attached between the count and the delete.
            await db.rollback()
            raise ReferentialIntegrityError(f"Cannot delete {kind.noun} with assets")

    logger.info("Deleted %s '%s'", kind.noun, name)

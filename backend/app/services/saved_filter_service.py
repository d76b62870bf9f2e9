import json
import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateError, NotFoundError, ValidationError, infrastructure_guard
from app.models.saved_filter import SavedFilter
from app.schemas.saved_filter import SavedFilterCreate

logger = logging.getLogger(__name__)


def serialize_config(value: Any) -> str:
    """Store strings as given and anything else as JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


async def list_filters(db: AsyncSession) -> list[SavedFilter]:
    with infrastructure_guard("Failed to fetch filters"):
        result = await db.execute(select(SavedFilter).order_by(SavedFilter.name))
    return list(result.scalars().all())


async def create_filter(db: AsyncSession, data: SavedFilterCreate) -> SavedFilter:
    if not data.name or data.filter_config is None or data.filter_config == "":
        raise ValidationError("Name and filter config are required")

    sort_config = None
    if data.sort_config is not None and data.sort_config != "":
        sort_config = serialize_config(data.sort_config)

    with infrastructure_guard("Failed to create filter"):
        existing = await db.execute(select(SavedFilter.id).where(SavedFilter.name == data.name))
        if existing.scalar_one_or_none():
            raise DuplicateError("Filter name already exists")

        record = SavedFilter(
            name=data.name,
            filter_config=serialize_config(data.filter_config),
            sort_config=sort_config,
            is_default=bool(data.is_default),
            description=data.description,
        )
        db.add(record)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateError("Filter name already exists")
        await db.refresh(record)

    logger.info("Saved filter '%s' created", record.name)
    return record


async def delete_filter(db: AsyncSession, filter_id: uuid.UUID) -> None:
    with infrastructure_guard("Failed to delete filter"):
        record = await db.get(SavedFilter, filter_id)
        if record is None:
            raise NotFoundError("Filter not found")
        await db.delete(record)
        await db.flush()

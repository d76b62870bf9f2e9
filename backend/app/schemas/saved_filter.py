from datetime import datetime
from typing import Any
from uuid import UUID

from app.schemas.common import CamelModel, ResponseModel


class SavedFilterCreate(CamelModel):
    name: str | None = None
    # Either pre-serialized JSON text or any JSON value
    filter_config: Any = None
    sort_config: Any = None
    is_default: bool | None = None
    description: str | None = None


class SavedFilterInDB(ResponseModel):
    id: UUID
    name: str
    filter_config: str
    sort_config: str | None = None
    is_default: bool
    description: str | None = None
    created_at: datetime | None = None

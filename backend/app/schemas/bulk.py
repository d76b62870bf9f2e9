"""Schemas for bulk asset updates.

Only keys present in ``fields`` are applied; pydantic's field-set tracking
(``model_dump(exclude_unset=True)``) keeps "absent" distinct from ``null``
or ``""``. Values are validated per asset by the service, so a bad value
fails each id instead of the whole request.
"""
from pydantic import BaseModel, Field, field_validator

from app.schemas.common import CamelModel


class BulkAssetFields(CamelModel):
    status: str | None = None
    condition: str | None = None
    category_id: str | None = None
    location_id: str | None = None
    # ISO date string; parsed by the service
    decommission_date: str | None = None
    comments: str | None = None


class BulkUpdateRequest(BaseModel):
    ids: list[str | int] = Field(default_factory=list)
    fields: BulkAssetFields = Field(default_factory=BulkAssetFields)

    @field_validator("ids")
    @classmethod
    def ids_as_strings(cls, v: list[str | int]) -> list[str]:
        return [str(i) for i in v]


class BulkUpdateError(BaseModel):
    id: str
    message: str


class BulkUpdateResponse(BaseModel):
    updated: int
    failed: int
    errors: list[BulkUpdateError] = []

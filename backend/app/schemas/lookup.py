"""Pydantic schemas for the lookup tables (categories, manufacturers, suppliers, locations).

``name`` is optional on create so a missing name is reported as a 400 by the
service rather than a 422 by the framework.
"""
from datetime import datetime
from uuid import UUID

from app.schemas.common import CamelModel, ResponseModel


class LookupInDB(ResponseModel):
    id: UUID
    name: str
    asset_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Categories

class CategoryCreate(CamelModel):
    name: str | None = None
    description: str | None = None


class CategoryUpdate(CategoryCreate):
    pass


class CategoryInDB(LookupInDB):
    description: str | None = None


# Manufacturers

class ManufacturerCreate(CamelModel):
    name: str | None = None
    website: str | None = None
    support_url: str | None = None
    contact_info: str | None = None


class ManufacturerUpdate(ManufacturerCreate):
    pass


class ManufacturerInDB(LookupInDB):
    website: str | None = None
    support_url: str | None = None
    contact_info: str | None = None


# Suppliers

class SupplierCreate(CamelModel):
    name: str | None = None
    website: str | None = None
    contact_info: str | None = None
    account_num: str | None = None


class SupplierUpdate(SupplierCreate):
    pass


class SupplierInDB(LookupInDB):
    website: str | None = None
    contact_info: str | None = None
    account_num: str | None = None


# Locations

class LocationCreate(CamelModel):
    name: str | None = None
    building: str | None = None
    floor: str | None = None
    room: str | None = None
    address: str | None = None


class LocationUpdate(LocationCreate):
    pass


class LocationInDB(LookupInDB):
    building: str | None = None
    floor: str | None = None
    room: str | None = None
    address: str | None = None

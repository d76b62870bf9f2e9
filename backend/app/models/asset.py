import enum
import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class AssetCondition(str, enum.Enum):
    NEW = "NEW"
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"
    NON_FUNCTIONAL = "NON_FUNCTIONAL"


# Status values are stored verbatim; the label is the value itself.
ASSET_STATUSES = (
    "In Use",
    "In Use - Loaned to student",
    "In Use - Loaned to staff",
    "Awaiting allocation",
    "Awaiting delivery",
    "Awaiting collection",
    "Decommissioned - Beyond service age",
    "Decommissioned - Damaged",
    "Decommissioned - Stolen",
    "Decommissioned - In storage",
    "Decommissioned - User left school",
    "Decommissioned - Written Off",
    "Decommissioned - Unreturned",
    "Retired - Uncollected",
    "Retired - Lost",
)

DECOMMISSIONED_PREFIX = "Decommissioned"


def is_decommissioned(status: str | None) -> bool:
    return bool(status) and status.startswith(DECOMMISSIONED_PREFIX)


class Asset(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "assets"

    item_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="Awaiting allocation", nullable=False)
    condition: Mapped[str | None] = mapped_column(String(20), nullable=True)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    decommission_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id"), index=True, nullable=True
    )
    manufacturer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("manufacturers.id"), index=True, nullable=True
    )
    supplier_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("suppliers.id"), index=True, nullable=True
    )
    location_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("locations.id"), index=True, nullable=True
    )

    category = relationship("Category", lazy="noload")
    manufacturer = relationship("Manufacturer", lazy="noload")
    supplier = relationship("Supplier", lazy="noload")
    location = relationship("Location", lazy="noload")

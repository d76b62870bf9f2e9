from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class SavedFilter(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "saved_filters"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # Serialized JSON text; the API never interprets it
    filter_config: Mapped[str] = mapped_column(Text, nullable=False)
    sort_config: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

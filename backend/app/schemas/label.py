from typing import Any

from pydantic import BaseModel

from app.schemas.common import CamelModel


class LabelOptions(CamelModel):
    """Fully resolved label options; every flag is a concrete boolean."""

    show_assigned_to: bool = True
    show_model: bool = True
    show_serial_number: bool = True


class LabelOptionsOverride(CamelModel):
    """Per-print overrides; ``None`` means "use the stored default"."""

    show_assigned_to: bool | None = None
    show_model: bool | None = None
    show_serial_number: bool | None = None


class PrintLabelRequest(LabelOptionsOverride):
    # Clamped by the service; non-numeric input counts as one copy
    copies: Any = 1


class PrintLabelResponse(BaseModel):
    success: bool
    message: str
    copies: int

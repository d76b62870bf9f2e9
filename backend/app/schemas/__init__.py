# Schemas package
from app.schemas.bulk import BulkUpdateRequest, BulkUpdateResponse
from app.schemas.label import LabelOptions, LabelOptionsOverride, PrintLabelRequest, PrintLabelResponse
from app.schemas.lookup import LookupInDB
from app.schemas.saved_filter import SavedFilterCreate, SavedFilterInDB
from app.schemas.setting import SettingResponse, SettingUpdate

__all__ = [
    "BulkUpdateRequest",
    "BulkUpdateResponse",
    "LabelOptions",
    "LabelOptionsOverride",
    "PrintLabelRequest",
    "PrintLabelResponse",
    "LookupInDB",
    "SavedFilterCreate",
    "SavedFilterInDB",
    "SettingResponse",
    "SettingUpdate",
]

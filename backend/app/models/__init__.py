from app.models.asset import ASSET_STATUSES, Asset, AssetCondition
from app.models.category import Category
from app.models.location import Location
from app.models.manufacturer import Manufacturer
from app.models.saved_filter import SavedFilter
from app.models.setting import Setting
from app.models.supplier import Supplier

__all__ = [
    "Asset", "AssetCondition", "ASSET_STATUSES",
    "Category",
    "Manufacturer",
    "Supplier",
    "Location",
    "SavedFilter",
    "Setting",
]

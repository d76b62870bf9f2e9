"""
Key/value application settings.
"""
from fastapi import APIRouter, Depends

from app.core.dependencies import get_settings_store
from app.core.exceptions import ValidationError
from app.schemas.setting import SettingResponse, SettingUpdate
from app.services.settings_store import SettingsStore

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/{key}", response_model=SettingResponse)
async def get_setting(key: str, store: SettingsStore = Depends(get_settings_store)):
    return SettingResponse(key=key, value=await store.get(key))


@router.put("/{key}", response_model=SettingResponse)
async def put_setting(key: str, body: SettingUpdate, store: SettingsStore = Depends(get_settings_store)):
    if body.value is None:
        raise ValidationError("Value is required")
    setting = await store.set(key, body.value)
    return SettingResponse(key=setting.key, value=setting.value)

from pydantic import BaseModel


class SettingUpdate(BaseModel):
    value: str | None = None


class SettingResponse(BaseModel):
    key: str
    value: str

"""Key/value settings store.

Wraps a session so services that read settings (label defaults, the
organization footer) receive the store explicitly instead of reaching for
global state. Missing keys read as ``""``; writes are upserts where the
last writer wins.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import infrastructure_guard
from app.models.setting import Setting

logger = logging.getLogger(__name__)

ORGANIZATION_KEY = "organization"


class SettingsStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, key: str) -> str:
        with infrastructure_guard("Failed to fetch setting"):
            setting = await self.db.get(Setting, key)
        if setting is None:
            return ""
        return setting.value or ""

    async def get_many(self, keys: list[str]) -> dict[str, str]:
        """Return stored values for ``keys``; unset keys are omitted."""
        with infrastructure_guard("Failed to fetch settings"):
            result = await self.db.execute(select(Setting).where(Setting.key.in_(keys)))
        return {s.key: s.value for s in result.scalars().all()}

    async def set(self, key: str, value: str) -> Setting:
        with infrastructure_guard("Failed to update setting"):
            setting = await self.db.get(Setting, key)
            if setting is None:
                try:
                    # Savepoint: a lost insert race must not undo earlier writes in this request
                    async with self.db.begin_nested():
                        setting = Setting(key=key, value=value)
                        self.db.add(setting)
                        await self.db.flush()
                except IntegrityError:
                    # A concurrent writer inserted the key first; overwrite it.
                    setting = await self.db.get(Setting, key, populate_existing=True)
                    if setting is None:
                        raise
                    setting.value = value
                    await self.db.flush()
            else:
                setting.value = value
                await self.db.flush()
        logger.info("Setting %s updated", key)
        return setting

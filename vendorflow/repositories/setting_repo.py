"""
Settings repository.
"""
from typing import Dict
from datetime import datetime

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.models.setting import Setting
from vendorflow.repositories.base import BaseRepository


class SettingRepository(BaseRepository[Setting]):
    """Repository for Setting operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Setting, session)

    async def get_map(self) -> Dict[str, str]:
        """All settings as a flat key -> value mapping."""
        result = await self.session.exec(select(Setting))
        return {row.key: row.value for row in result.all()}

    async def upsert_many(self, values: Dict[str, str]) -> Dict[str, str]:
        """Insert or update several keys in one commit."""
        if not values:
            return await self.get_map()

        result = await self.session.exec(select(Setting).where(Setting.key.in_(list(values))))
        existing = {row.key: row for row in result.all()}

        now = datetime.utcnow()
        for key, value in values.items():
            row = existing.get(key)
            if row is None:
                row = Setting(key=key, value=value, updated_at=now)
            else:
                row.value = value
                row.updated_at = now
            self.session.add(row)

        await self.session.commit()
        return await self.get_map()

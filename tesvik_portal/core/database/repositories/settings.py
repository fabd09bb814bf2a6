"""
Repositories for admin-managed settings.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.settings import AdminSetting, MenuVisibilitySetting, ProvinceRegion
from .base import SQLModelRepository


class AdminSettingRepository(SQLModelRepository[AdminSetting]):
    default_order = (AdminSetting.category, AdminSetting.setting_key)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AdminSetting)

    async def values_for_category(self, category: str) -> Dict[str, float]:
        result = await self.session.execute(select(AdminSetting).where(AdminSetting.category == category))
        return {row.setting_key: row.setting_value for row in result.scalars().all()}

    async def upsert(
        self, setting_key: str, setting_value: float, category: str, description: Optional[str] = None
    ) -> AdminSetting:
        """Insert or update a setting identified by ``setting_key`` (not committed)."""
        result = await self.session.execute(select(AdminSetting).where(AdminSetting.setting_key == setting_key))
        row = result.scalars().first()
        if row is None:
            row = AdminSetting(
                setting_key=setting_key, setting_value=setting_value, category=category, description=description
            )
        else:
            row.setting_value = setting_value
            row.category = category
            if description is not None:
                row.description = description
        self.session.add(row)
        return row


class MenuVisibilityRepository(SQLModelRepository[MenuVisibilitySetting]):
    default_order = (MenuVisibilitySetting.setting_key,)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MenuVisibilitySetting)

    async def as_mapping(self) -> Dict[str, MenuVisibilitySetting]:
        return {row.setting_key: row for row in await self.list()}

    async def upsert(self, setting_key: str, admin: bool, registered: bool, anonymous: bool) -> MenuVisibilitySetting:
        result = await self.session.execute(
            select(MenuVisibilitySetting).where(MenuVisibilitySetting.setting_key == setting_key)
        )
        row = result.scalars().first() or MenuVisibilitySetting(setting_key=setting_key)
        row.admin = admin
        row.registered = registered
        row.anonymous = anonymous
        self.session.add(row)
        return row


class ProvinceRegionRepository(SQLModelRepository[ProvinceRegion]):
    default_order = (ProvinceRegion.province,)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProvinceRegion)

    async def overrides(self) -> Dict[str, int]:
        return {row.province: row.region for row in await self.list()}

    async def upsert_many(self, mapping: Dict[str, int]) -> List[ProvinceRegion]:
        existing = {row.province: row for row in await self.list()}
        rows = []
        for province, region in mapping.items():
            row = existing.get(province) or ProvinceRegion(province=province, region=region)
            row.region = region
            self.session.add(row)
            rows.append(row)
        await self.session.commit()
        return rows

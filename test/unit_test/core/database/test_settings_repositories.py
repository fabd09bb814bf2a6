"""Unit tests for admin settings, menu visibility, province region and user role repositories."""

from __future__ import annotations

import pytest

from tesvik_portal.core.database.entities.users import AppRole
from tesvik_portal.core.database.repositories.settings import (
    AdminSettingRepository,
    MenuVisibilityRepository,
    ProvinceRegionRepository,
)
from tesvik_portal.core.database.repositories.users import UserRoleRepository

pytestmark = pytest.mark.asyncio


class TestAdminSettingRepository:
    async def test_upsert_inserts_then_updates(self, session):
        repo = AdminSettingRepository(session)
        await repo.upsert("minimum_fixed_investment_amount", 6_000_000, "incentive_calculation", "Asgari tutar")
        await session.commit()
        await repo.upsert("minimum_fixed_investment_amount", 7_500_000, "incentive_calculation")
        await session.commit()

        rows = await repo.list()
        assert len(rows) == 1
        assert rows[0].setting_value == 7_500_000
        assert rows[0].description == "Asgari tutar"

    async def test_values_for_category(self, session):
        repo = AdminSettingRepository(session)
        await repo.upsert("a", 1.0, "incentive_calculation")
        await repo.upsert("b", 2.0, "other")
        await session.commit()
        assert await repo.values_for_category("incentive_calculation") == {"a": 1.0}


class TestMenuVisibilityRepository:
    async def test_upsert_and_mapping(self, session):
        repo = MenuVisibilityRepository(session)
        await repo.upsert("menu_item_chat", True, True, False)
        await session.commit()
        await repo.upsert("menu_item_chat", True, True, True)
        await session.commit()

        mapping = await repo.as_mapping()
        assert list(mapping) == ["menu_item_chat"]
        assert mapping["menu_item_chat"].anonymous is True


class TestProvinceRegionRepository:
    async def test_upsert_many(self, session):
        repo = ProvinceRegionRepository(session)
        await repo.upsert_many({"Van": 6, "Bursa": 2})
        await repo.upsert_many({"Van": 5})
        assert await repo.overrides() == {"Bursa": 2, "Van": 5}


class TestUserRoleRepository:
    async def test_grant_revoke(self, session):
        repo = UserRoleRepository(session)
        assert await repo.grant("user-1", AppRole.ADMIN) is True
        assert await repo.grant("user-1", AppRole.ADMIN) is False
        assert await repo.has_role("user-1", AppRole.ADMIN) is True
        assert await repo.has_role("user-1", AppRole.USER) is False
        assert await repo.user_ids_with_role(AppRole.ADMIN) == ["user-1"]

        assert await repo.revoke("user-1", AppRole.ADMIN) is True
        assert await repo.revoke("user-1", AppRole.ADMIN) is False
        assert await repo.user_ids_with_role(AppRole.ADMIN) == []

import pytest
from pydantic import ValidationError

from tesvik_portal.core.database.repositories.settings import AdminSettingRepository
from tesvik_portal.incentives.parameters import (
    INCENTIVE_CATEGORY,
    IncentiveParameters,
    load_parameters,
    save_parameters,
)


class TestIncentiveParameters:
    def test_from_settings_ignores_unknown_keys(self):
        params = IncentiveParameters.from_settings({"sgk_employer_premium_rate": 5000, "unrelated": 1})
        assert params.sgk_employer_premium_rate == 5000
        assert params.minimum_fixed_investment_amount == 6_000_000

    def test_values_must_be_positive(self):
        with pytest.raises(ValidationError):
            IncentiveParameters(minimum_fixed_investment_amount=0)


@pytest.mark.asyncio
class TestPersistence:
    async def test_load_defaults_when_nothing_saved(self, session):
        assert await load_parameters(AdminSettingRepository(session)) == IncentiveParameters()

    async def test_save_then_load(self, session):
        repo = AdminSettingRepository(session)
        await save_parameters(repo, IncentiveParameters(minimum_fixed_investment_amount=7_000_000))

        loaded = await load_parameters(repo)
        assert loaded.minimum_fixed_investment_amount == 7_000_000
        rows = await repo.list(filters={"category": INCENTIVE_CATEGORY})
        assert len(rows) == 3

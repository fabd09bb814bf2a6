"""Admin-configurable calculator constants.

The values live in ``admin_settings`` under category ``incentive_calculation``;
keys that were never saved fall back to the defaults below.
"""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, Field

from tesvik_portal.core.database.repositories.settings import AdminSettingRepository
from tesvik_portal.core.logging_config import get_logger

logger = get_logger(__name__)

INCENTIVE_CATEGORY = "incentive_calculation"

DESCRIPTIONS = {
    "minimum_fixed_investment_amount": "Minimum total fixed investment (TL)",
    "sgk_employer_premium_rate": "SGK employer premium base per employee per month (TL)",
    "sgk_employee_premium_rate": "SGK employee premium base per employee per month (TL)",
}


class IncentiveParameters(BaseModel):
    minimum_fixed_investment_amount: float = Field(default=6_000_000, gt=0)
    sgk_employer_premium_rate: float = Field(default=4355.92, gt=0)
    sgk_employee_premium_rate: float = Field(default=3640.77, gt=0)

    @classmethod
    def from_settings(cls, values: Mapping[str, float]) -> "IncentiveParameters":
        known = {key: values[key] for key in cls.model_fields if key in values}
        return cls(**known)


async def load_parameters(repo: AdminSettingRepository) -> IncentiveParameters:
    values = await repo.values_for_category(INCENTIVE_CATEGORY)
    return IncentiveParameters.from_settings(values)


async def save_parameters(repo: AdminSettingRepository, parameters: IncentiveParameters) -> IncentiveParameters:
    """Upsert every parameter key in one transaction."""
    for key, value in parameters.model_dump().items():
        await repo.upsert(key, value, INCENTIVE_CATEGORY, DESCRIPTIONS.get(key))
    await repo.session.commit()
    logger.info(f"Incentive parameters updated: {parameters.model_dump()}")
    return parameters

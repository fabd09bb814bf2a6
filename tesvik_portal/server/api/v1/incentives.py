"""
API endpoints for the incentive tools.

Provides the incentive calculator, the admin-configurable calculator
parameters, the province to region table with its overrides and the NACE
code / sector eligibility lookup.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.repositories.sectors import SectorSearchRepository
from tesvik_portal.core.database.repositories.settings import AdminSettingRepository, ProvinceRegionRepository
from tesvik_portal.core.errors import ValidationFailedError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.models.io import ProvinceRegionRead, ProvinceRegionUpdate
from tesvik_portal.incentives import (
    PROVINCE_REGIONS,
    IncentiveCalculatorInputs,
    IncentiveCalculatorResults,
    IncentiveParameters,
    calculate_incentives,
)
from tesvik_portal.incentives.nace import NaceLookupResult, lookup_nace
from tesvik_portal.incentives.parameters import load_parameters, save_parameters
from tesvik_portal.incentives.regions import canonical_province
from tesvik_portal.server.core.security import require_admin

logger = get_logger(__name__)

router = APIRouter(tags=["incentives"])


class NaceLookupRequest(BaseModel):
    question: str = Field(min_length=1, description="A NACE code or a sector name, e.g. '20.13' or 'un üretimi'")


@router.post(
    "/calculate",
    response_model=IncentiveCalculatorResults,
    summary="Calculate Incentives",
    description="Estimate the support items of an investment incentive certificate for the given investment.",
    response_description="Calculated support amounts, eligibility, validation errors and warnings.",
    responses={
        200: {"description": "Calculation finished (check is_eligible)"},
        422: {"description": "Malformed input"},
    },
)
async def calculate(
    inputs: IncentiveCalculatorInputs,
    session: AsyncSession = Depends(get_session),
) -> IncentiveCalculatorResults:
    """
    Run the incentive calculator.

    Uses the parameters stored by the admins and the province region overrides.
    Validation problems (e.g. an investment below the minimum amount) are
    returned in the result with ``is_eligible=false`` instead of an error status.
    """
    parameters = await load_parameters(AdminSettingRepository(session))
    overrides = await ProvinceRegionRepository(session).overrides()
    return calculate_incentives(inputs, parameters, overrides)


@router.get(
    "/parameters",
    response_model=IncentiveParameters,
    summary="Get Calculator Parameters",
    description="Retrieve the constants used by the incentive calculator.",
)
async def get_parameters(session: AsyncSession = Depends(get_session)) -> IncentiveParameters:
    return await load_parameters(AdminSettingRepository(session))


@router.put(
    "/parameters",
    response_model=IncentiveParameters,
    summary="Update Calculator Parameters",
    description="Store new calculator constants. Admin only.",
    responses={
        200: {"description": "Parameters saved"},
        401: {"description": "Authentication required"},
        403: {"description": "Admin role required"},
    },
)
async def update_parameters(
    parameters: IncentiveParameters,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> IncentiveParameters:
    """
    Update the calculator parameters.

    All three keys are written, so the stored set is always complete.
    """
    return await save_parameters(AdminSettingRepository(session), parameters)


@router.get(
    "/regions",
    response_model=List[ProvinceRegionRead],
    summary="List Province Regions",
    description="Development region of every province, with admin overrides applied.",
)
async def list_regions(session: AsyncSession = Depends(get_session)) -> List[ProvinceRegionRead]:
    overrides = await ProvinceRegionRepository(session).overrides()
    provinces = sorted(set(PROVINCE_REGIONS) | set(overrides))
    return [
        ProvinceRegionRead(
            province=province,
            region=overrides.get(province, PROVINCE_REGIONS.get(province, 1)),
            overridden=province in overrides,
        )
        for province in provinces
    ]


@router.put(
    "/regions",
    response_model=List[ProvinceRegionRead],
    summary="Override Province Regions",
    description="Set the development region of one or more provinces. Admin only.",
    responses={
        200: {"description": "Overrides saved"},
        400: {"description": "Region outside 1-6 or empty province"},
        401: {"description": "Authentication required"},
        403: {"description": "Admin role required"},
    },
)
async def update_regions(
    payload: ProvinceRegionUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[ProvinceRegionRead]:
    mapping = {}
    for province, region in payload.regions.items():
        name = canonical_province(province)
        if not name:
            raise ValidationFailedError("Province name must not be empty")
        if not 1 <= region <= 6:
            raise ValidationFailedError(f"Region of {name} must be between 1 and 6, got {region}")
        mapping[name] = region
    rows = await ProvinceRegionRepository(session).upsert_many(mapping)
    logger.info(f"Province region overrides updated: {mapping}")
    return [ProvinceRegionRead(province=row.province, region=row.region, overridden=True) for row in rows]


@router.post(
    "/nace-lookup",
    response_model=NaceLookupResult,
    summary="Look Up NACE Code",
    description="Find a sector by NACE code or name and describe its incentive eligibility.",
    response_description="The formatted answer, a disambiguation list or found=false.",
)
async def nace_lookup(
    payload: NaceLookupRequest,
    session: AsyncSession = Depends(get_session),
) -> NaceLookupResult:
    rows = await SectorSearchRepository(session).list()
    return lookup_nace(payload.question, rows)

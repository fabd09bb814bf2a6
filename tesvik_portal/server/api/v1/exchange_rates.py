"""
API endpoints for the Central Bank exchange rates.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.models.io import ExchangeRateRead
from tesvik_portal.server.core.security import require_admin
from tesvik_portal.server.services.deps import ExchangeRateServiceDep

router = APIRouter(tags=["exchange-rates"])


@router.get(
    "/latest",
    response_model=ExchangeRateRead,
    summary="Latest Exchange Rates",
    description="USD, EUR and GBP forex buying/selling rates of the most recent stored day.",
    responses={404: {"description": "No rates stored yet"}},
)
async def latest_rates(service: ExchangeRateServiceDep) -> ExchangeRateRead:
    row = await service.latest()
    if row is None:
        raise NotFoundError("No exchange rates stored yet")
    return ExchangeRateRead.model_validate(row)


@router.post(
    "/refresh",
    response_model=ExchangeRateRead,
    summary="Refresh Exchange Rates",
    description="Fetch today's rates from the Central Bank and store them. Admin only.",
    responses={502: {"description": "The Central Bank feed could not be read"}},
)
async def refresh_rates(
    service: ExchangeRateServiceDep,
    _admin: str = Depends(require_admin),
) -> ExchangeRateRead:
    return ExchangeRateRead.model_validate(await service.refresh())

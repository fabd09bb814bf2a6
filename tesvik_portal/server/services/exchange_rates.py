"""
Exchange rate service.

Pulls the Central Bank's daily rates and stores one row per publication date.
"""

from __future__ import annotations

from typing import Optional

from tesvik_portal.clients.tcmb import TcmbExchangeClient
from tesvik_portal.core.database.entities.exchange_rates import ExchangeRate
from tesvik_portal.core.database.repositories.exchange_rates import ExchangeRateRepository
from tesvik_portal.core.logging_config import get_logger

logger = get_logger(__name__)


class ExchangeRateService:
    def __init__(self, repo: ExchangeRateRepository, client: TcmbExchangeClient) -> None:
        self.repo = repo
        self.client = client

    async def refresh(self) -> ExchangeRate:
        """Fetch today's rates and upsert them by date.

        Raises:
            ExchangeRateError: The feed could not be fetched or parsed.
        """
        rates = await self.client.fetch_today()
        row = await self.repo.upsert(rates.rate_date, rates.as_columns())
        logger.info(f"Exchange rates stored for {rates.rate_date}: USD={row.usd_selling} EUR={row.eur_selling}")
        return row

    async def latest(self) -> Optional[ExchangeRate]:
        return await self.repo.latest()

"""
Exchange rate repository.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tesvik_portal.core.text import utc_now

from ..entities.exchange_rates import ExchangeRate
from .base import SQLModelRepository


class ExchangeRateRepository(SQLModelRepository[ExchangeRate]):
    default_order = (ExchangeRate.rate_date.desc(),)  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ExchangeRate)

    async def latest(self) -> Optional[ExchangeRate]:
        result = await self.session.execute(select(ExchangeRate).order_by(*self.default_order).limit(1))
        return result.scalars().first()

    async def upsert(self, rate_date: date, values: Dict[str, Any]) -> ExchangeRate:
        """Insert or replace the rates for ``rate_date``."""
        result = await self.session.execute(select(ExchangeRate).where(ExchangeRate.rate_date == rate_date))
        row = result.scalars().first() or ExchangeRate(rate_date=rate_date)
        for key, value in values.items():
            setattr(row, key, value)
        row.updated_at = utc_now()
        return await self.update(row)

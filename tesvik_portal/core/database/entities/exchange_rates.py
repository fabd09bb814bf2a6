"""
Exchange rate entity model.

Daily TCMB buying/selling rates for the currencies shown on the portal.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


class ExchangeRate(Base, table=True):
    """Table: exchange_rates"""

    __tablename__ = "exchange_rates"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    rate_date: date = Field(unique=True, index=True)
    usd_buying: Optional[float] = Field(default=None)
    usd_selling: Optional[float] = Field(default=None)
    eur_buying: Optional[float] = Field(default=None)
    eur_selling: Optional[float] = Field(default=None)
    gbp_buying: Optional[float] = Field(default=None)
    gbp_selling: Optional[float] = Field(default=None)
    updated_at: datetime = timestamp_field()

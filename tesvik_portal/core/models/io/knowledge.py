"""
Knowledge base and exchange-rate I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeDocumentCreate(BaseModel):
    filename: str = Field(min_length=1, description="Document name, used as its identity")
    content: str = Field(min_length=1, description="Plain text of the document")


class ExchangeRateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rate_date: date
    usd_buying: Optional[float] = None
    usd_selling: Optional[float] = None
    eur_buying: Optional[float] = None
    eur_selling: Optional[float] = None
    gbp_buying: Optional[float] = None
    gbp_selling: Optional[float] = None
    updated_at: datetime

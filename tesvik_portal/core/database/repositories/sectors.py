"""
Sector eligibility repository.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.sectors import SectorSearch
from .base import SQLModelRepository


class SectorSearchRepository(SQLModelRepository[SectorSearch]):
    default_order = (SectorSearch.nace_kodu,)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SectorSearch)

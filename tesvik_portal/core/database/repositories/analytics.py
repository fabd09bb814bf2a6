"""
Search analytics repository.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.analytics import SearchAnalytics
from .base import SQLModelRepository


class SearchAnalyticsRepository(SQLModelRepository[SearchAnalytics]):
    default_order = (SearchAnalytics.created_at.desc(),)  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SearchAnalytics)

    async def popular_queries(self, limit: int = 10, source: Optional[str] = None) -> List[Tuple[str, int, float]]:
        """Most frequent queries as (query, count, average response time in ms)."""
        stmt = select(
            SearchAnalytics.query,
            func.count(SearchAnalytics.id).label("search_count"),
            func.avg(SearchAnalytics.total_response_time_ms),
        )
        if source:
            stmt = stmt.where(SearchAnalytics.search_source == source)
        stmt = (
            stmt.group_by(SearchAnalytics.query)
            .order_by(func.count(SearchAnalytics.id).desc(), SearchAnalytics.query)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(query, count, float(avg or 0)) for query, count, avg in result.all()]

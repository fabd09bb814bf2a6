"""
Search analytics entity model.

Each filtered support search leaves one row, used to report popular queries.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


class SearchAnalytics(Base, table=True):
    """Table: hybrid_search_analytics"""

    __tablename__ = "hybrid_search_analytics"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    query: str = Field(index=True)
    search_source: str = Field(default="support_search", index=True)
    total_response_time_ms: int = Field(default=0)
    support_match_count: int = Field(default=0)
    session_id: Optional[str] = Field(default=None)
    cache_key: Optional[str] = Field(default=None, description="JSON encoded filters")
    created_at: datetime = timestamp_field(index=True)

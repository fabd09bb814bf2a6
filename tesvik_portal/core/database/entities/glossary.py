"""
Investor glossary entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


class GlossaryTerm(Base, table=True):
    """Term and its definition in the investor glossary.

    Table: glossary_terms
    """

    __tablename__ = "glossary_terms"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    term: str = Field(unique=True, index=True)
    definition: str
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field(on_update=True)

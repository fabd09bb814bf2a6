"""
Knowledge base entity model.

Uploaded Q&A documents are split into chunks; each chunk stores its text
embedding as a JSON float array so retrieval works on any backend.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, timestamp_field


class KnowledgeChunk(Base, table=True):
    """Table: knowledge_chunks"""

    __tablename__ = "knowledge_chunks"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    filename: str = Field(index=True)
    chunk_index: int = Field(default=0)
    content: str
    embedding: Optional[List[float]] = Field(default=None, sa_column=Column(JSON(none_as_null=True), nullable=True))
    created_at: datetime = timestamp_field()

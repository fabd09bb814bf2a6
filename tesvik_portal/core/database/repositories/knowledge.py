"""
Knowledge chunk repository.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.knowledge import KnowledgeChunk
from .base import SQLModelRepository


class KnowledgeChunkRepository(SQLModelRepository[KnowledgeChunk]):
    default_order = (KnowledgeChunk.filename, KnowledgeChunk.chunk_index)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, KnowledgeChunk)

    async def with_embeddings(self) -> List[KnowledgeChunk]:
        result = await self.session.execute(
            select(KnowledgeChunk).where(KnowledgeChunk.embedding.is_not(None))  # type: ignore
        )
        return list(result.scalars().all())

    async def delete_by_filename(self, filename: str) -> int:
        result = await self.session.execute(delete(KnowledgeChunk).where(KnowledgeChunk.filename == filename))  # type: ignore
        await self.session.commit()
        return result.rowcount or 0

    async def replace_document(self, filename: str, chunks: Sequence[KnowledgeChunk]) -> int:
        """Swap all chunks of ``filename`` for ``chunks`` in one transaction.

        Returns the number of chunks removed. On failure the previous chunks
        are kept.
        """
        try:
            result = await self.session.execute(
                delete(KnowledgeChunk).where(KnowledgeChunk.filename == filename)  # type: ignore
            )
            self.session.add_all(list(chunks))
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount or 0

    async def document_counts(self) -> List[Tuple[str, int]]:
        result = await self.session.execute(
            select(KnowledgeChunk.filename, func.count(KnowledgeChunk.id))
            .group_by(KnowledgeChunk.filename)
            .order_by(KnowledgeChunk.filename)
        )
        return [(filename, count) for filename, count in result.all()]

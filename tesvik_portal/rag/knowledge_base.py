"""Knowledge base: ingestion of Q&A documents and similarity retrieval."""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel

from tesvik_portal.clients.openai_embeddings import Embedder
from tesvik_portal.core.database.entities.knowledge import KnowledgeChunk
from tesvik_portal.core.database.repositories.knowledge import KnowledgeChunkRepository
from tesvik_portal.core.errors import ValidationFailedError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.text import cosine_similarity

from .chunking import chunk_text

logger = get_logger(__name__)


class DocumentMatch(BaseModel):
    id: int
    filename: str
    content: str
    similarity: float


class DocumentSummary(BaseModel):
    filename: str
    chunk_count: int


class IngestResult(BaseModel):
    filename: str
    chunk_count: int


def rank_chunks(
    chunks: Sequence[KnowledgeChunk], query_embedding: Sequence[float], threshold: float, count: int
) -> List[DocumentMatch]:
    """Chunks with cosine similarity >= ``threshold``, best first, at most ``count``."""
    matches = []
    for chunk in chunks:
        if not chunk.embedding:
            continue
        similarity = cosine_similarity(query_embedding, chunk.embedding)
        if similarity >= threshold:
            matches.append(
                DocumentMatch(id=chunk.id, filename=chunk.filename, content=chunk.content, similarity=similarity)
            )
    matches.sort(key=lambda m: (-m.similarity, m.id))
    return matches[:count]


class KnowledgeBaseService:
    def __init__(self, repo: KnowledgeChunkRepository, embedder: Embedder, *, chunk_size: int = 500) -> None:
        self.repo = repo
        self.embedder = embedder
        self.chunk_size = chunk_size

    async def ingest(self, filename: str, content: str) -> IngestResult:
        """Chunk, embed and store a document, replacing any previous version of it."""
        filename = (filename or "").strip()
        if not filename:
            raise ValidationFailedError("filename is required")
        chunks = chunk_text(content or "", self.chunk_size)
        if not chunks:
            raise ValidationFailedError("Document has no text content")

        logger.info(f"Ingesting {filename}: {len(chunks)} chunks")
        rows = []
        for index, text in enumerate(chunks):
            embedding = await self.embedder.embed(text)
            rows.append(KnowledgeChunk(filename=filename, chunk_index=index, content=text, embedding=embedding))

        removed = await self.repo.replace_document(filename, rows)
        if removed:
            logger.info(f"Replaced {removed} existing chunks of {filename}")
        return IngestResult(filename=filename, chunk_count=len(rows))

    async def delete_document(self, filename: str) -> int:
        return await self.repo.delete_by_filename(filename)

    async def list_documents(self) -> List[DocumentSummary]:
        return [DocumentSummary(filename=f, chunk_count=c) for f, c in await self.repo.document_counts()]

    async def match_documents(self, query_embedding: Sequence[float], threshold: float, count: int) -> List[DocumentMatch]:
        chunks = await self.repo.with_embeddings()
        return rank_chunks(chunks, query_embedding, threshold, count)

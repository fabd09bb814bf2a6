"""
API endpoints for the chat assistant's knowledge base. Admin only.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.models.io import KnowledgeDocumentCreate
from tesvik_portal.rag.knowledge_base import DocumentSummary, IngestResult
from tesvik_portal.server.core.security import require_admin
from tesvik_portal.server.services.deps import KnowledgeBaseDep

router = APIRouter(tags=["knowledge"], dependencies=[Depends(require_admin)])


@router.post(
    "/documents",
    response_model=IngestResult,
    status_code=status.HTTP_201_CREATED,
    summary="Ingest Knowledge Document",
    description="Split a text document into chunks, embed them and store them. A document with the same filename is replaced.",
    responses={
        400: {"description": "Empty document"},
        502: {"description": "Embedding API failed"},
    },
)
async def ingest_document(payload: KnowledgeDocumentCreate, knowledge_base: KnowledgeBaseDep) -> IngestResult:
    return await knowledge_base.ingest(payload.filename, payload.content)


@router.get(
    "/documents",
    response_model=List[DocumentSummary],
    summary="List Knowledge Documents",
    description="Retrieve the ingested documents with their chunk counts.",
)
async def list_documents(knowledge_base: KnowledgeBaseDep) -> List[DocumentSummary]:
    return await knowledge_base.list_documents()


@router.delete(
    "/documents/{filename}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Knowledge Document",
    responses={404: {"description": "Document not found"}},
)
async def delete_document(filename: str, knowledge_base: KnowledgeBaseDep) -> None:
    if not await knowledge_base.delete_document(filename):
        raise NotFoundError(f"Knowledge document {filename} not found")

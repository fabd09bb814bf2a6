"""
API endpoints for the legal document library (laws, regulations, decrees).

The public endpoints only show active documents. Admins manage the library
and switch documents between active and inactive.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.content import DocumentStatus, LegalDocument
from tesvik_portal.core.database.repositories.content import LegalDocumentRepository
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.models.io import (
    LegalDocumentCreate,
    LegalDocumentRead,
    LegalDocumentStatusUpdate,
    LegalDocumentUpdate,
)
from tesvik_portal.server.core.security import require_admin

router = APIRouter(tags=["legal-documents"])


async def _get_document(repo: LegalDocumentRepository, document_id: int) -> LegalDocument:
    document = await repo.get_by_id(document_id)
    if document is None:
        raise NotFoundError(f"Legal document {document_id} not found")
    return document


@router.get(
    "",
    response_model=List[LegalDocumentRead],
    summary="List Legal Documents",
    description="Retrieve active legal documents, optionally filtered by type and keyword.",
)
async def list_documents(
    document_type: Optional[str] = Query(default=None),
    keyword: Optional[str] = Query(default=None, description="Matched against title, description, keywords and number"),
    session: AsyncSession = Depends(get_session),
) -> List[LegalDocumentRead]:
    documents = await LegalDocumentRepository(session).search(document_type=document_type, keyword=keyword)
    return [LegalDocumentRead.model_validate(d) for d in documents]


@router.get(
    "/all",
    response_model=List[LegalDocumentRead],
    summary="List All Legal Documents",
    description="Retrieve every legal document, including inactive ones. Admin only.",
)
async def list_all_documents(
    document_type: Optional[str] = Query(default=None),
    keyword: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[LegalDocumentRead]:
    documents = await LegalDocumentRepository(session).search(
        document_type=document_type, keyword=keyword, active_only=False
    )
    return [LegalDocumentRead.model_validate(d) for d in documents]


@router.get(
    "/{document_id}",
    response_model=LegalDocumentRead,
    summary="Get Legal Document",
    responses={404: {"description": "Document not found or inactive"}},
)
async def get_document(document_id: int, session: AsyncSession = Depends(get_session)) -> LegalDocumentRead:
    document = await _get_document(LegalDocumentRepository(session), document_id)
    if document.status != DocumentStatus.ACTIVE:
        raise NotFoundError(f"Legal document {document_id} not found")
    return LegalDocumentRead.model_validate(document)


@router.post(
    "",
    response_model=LegalDocumentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Legal Document",
)
async def create_document(
    payload: LegalDocumentCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> LegalDocumentRead:
    document = await LegalDocumentRepository(session).create(LegalDocument(**payload.model_dump()))
    return LegalDocumentRead.model_validate(document)


@router.patch(
    "/{document_id}",
    response_model=LegalDocumentRead,
    summary="Update Legal Document",
    responses={404: {"description": "Document not found"}},
)
async def update_document(
    document_id: int,
    payload: LegalDocumentUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> LegalDocumentRead:
    repo = LegalDocumentRepository(session)
    document = await _get_document(repo, document_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(document, key, value)
    return LegalDocumentRead.model_validate(await repo.update(document))


@router.patch(
    "/{document_id}/status",
    response_model=LegalDocumentRead,
    summary="Set Legal Document Status",
    description="Activate or deactivate a legal document. Admin only.",
    responses={404: {"description": "Document not found"}},
)
async def set_document_status(
    document_id: int,
    payload: LegalDocumentStatusUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> LegalDocumentRead:
    repo = LegalDocumentRepository(session)
    document = await _get_document(repo, document_id)
    document.status = payload.status
    return LegalDocumentRead.model_validate(await repo.update(document))


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Legal Document",
    responses={404: {"description": "Document not found"}},
)
async def delete_document(
    document_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    if not await LegalDocumentRepository(session).delete(document_id):
        raise NotFoundError(f"Legal document {document_id} not found")

"""
API endpoints for the investor glossary.

Terms are listed alphabetically and can be searched by keyword or filtered by
initial letter. Reads are public; changes are admin only.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.glossary import GlossaryTerm
from tesvik_portal.core.database.repositories.glossary import GlossaryRepository
from tesvik_portal.core.errors import NotFoundError, ValidationFailedError
from tesvik_portal.core.models.io import GlossaryPage, GlossaryTermCreate, GlossaryTermRead, GlossaryTermUpdate
from tesvik_portal.server.core.security import require_admin

router = APIRouter(tags=["glossary"])


async def _get_term(repo: GlossaryRepository, term_id: int) -> GlossaryTerm:
    term = await repo.get_by_id(term_id)
    if term is None:
        raise NotFoundError(f"Glossary term {term_id} not found")
    return term


async def _check_unique(repo: GlossaryRepository, term: str, term_id: Optional[int] = None) -> None:
    existing = await repo.get_by_term(term)
    if existing is not None and existing.id != term_id:
        raise ValidationFailedError(f"Glossary term '{term}' already exists", details={"term": term})


@router.get(
    "",
    response_model=GlossaryPage,
    summary="List Glossary Terms",
    description="Terms in alphabetical order with the total number of matches.",
)
async def list_terms(
    q: Optional[str] = Query(default=None, description="Keyword matched against term and definition"),
    letter: Optional[str] = Query(default=None, max_length=1, description="Initial letter of the term"),
    limit: int = Query(default=20, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> GlossaryPage:
    terms, total = await GlossaryRepository(session).search(keyword=q, letter=letter, limit=limit, offset=offset)
    return GlossaryPage(total=total, items=[GlossaryTermRead.model_validate(t) for t in terms])


@router.get(
    "/{term_id}",
    response_model=GlossaryTermRead,
    summary="Get Glossary Term",
    responses={404: {"description": "Glossary term not found"}},
)
async def get_term(term_id: int, session: AsyncSession = Depends(get_session)) -> GlossaryTermRead:
    return GlossaryTermRead.model_validate(await _get_term(GlossaryRepository(session), term_id))


@router.post(
    "",
    response_model=GlossaryTermRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Glossary Term",
    responses={400: {"description": "Term already exists"}},
)
async def create_term(
    payload: GlossaryTermCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> GlossaryTermRead:
    repo = GlossaryRepository(session)
    await _check_unique(repo, payload.term)
    return GlossaryTermRead.model_validate(await repo.create(GlossaryTerm(**payload.model_dump())))


@router.patch(
    "/{term_id}",
    response_model=GlossaryTermRead,
    summary="Update Glossary Term",
    responses={400: {"description": "Term already exists"}, 404: {"description": "Glossary term not found"}},
)
async def update_term(
    term_id: int,
    payload: GlossaryTermUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> GlossaryTermRead:
    repo = GlossaryRepository(session)
    term = await _get_term(repo, term_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "term" in changes:
        await _check_unique(repo, changes["term"], term_id)
    for key, value in changes.items():
        setattr(term, key, value)
    return GlossaryTermRead.model_validate(await repo.update(term))


@router.delete(
    "/{term_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Glossary Term",
    responses={404: {"description": "Glossary term not found"}},
)
async def delete_term(
    term_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    if not await GlossaryRepository(session).delete(term_id):
        raise NotFoundError(f"Glossary term {term_id} not found")

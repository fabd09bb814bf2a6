"""
API endpoints for the support-program search.

The search combines structured filters (institution, tags, open/closed
status) with keyword and semantic ranking. Admins can regenerate program
embeddings from here as well.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query

from tesvik_portal.core.models.io import (
    EmbeddingRunRead,
    PopularQueryRead,
    SupportProgramRead,
    SupportSearchHit,
    SupportSearchResponse,
)
from tesvik_portal.search.hybrid import SEARCH_SOURCE, SearchFilters
from tesvik_portal.server.core.config import settings
from tesvik_portal.server.core.security import require_admin
from tesvik_portal.server.services.deps import ProgramEmbeddingServiceDep, SearchServiceDep

from .support_programs import program_read

router = APIRouter(tags=["search"])


@router.get(
    "/support-programs",
    response_model=SupportSearchResponse,
    summary="Search Support Programs",
    description="Search support programs by keyword and structured filters. Without a keyword the filtered programs are listed newest first.",
    response_description="Ranked programs with score and match type, and the total hit count.",
)
async def search_support_programs(
    service: SearchServiceDep,
    keyword: Optional[str] = Query(default=None, description="Free text query"),
    institution_id: Optional[int] = Query(default=None),
    tag_ids: Optional[List[int]] = Query(default=None, description="Programs carrying ANY of these tags"),
    status: Optional[str] = Query(default=None, pattern="^(open|closed)$"),
    limit: int = Query(default=settings.search.default_limit, ge=1, le=settings.search.max_limit),
    offset: int = Query(default=0, ge=0),
    x_session_id: Optional[str] = Header(default=None),
) -> SupportSearchResponse:
    """
    Search support programs.

    - **keyword**: ranked by keyword overlap and semantic similarity
    - **institution_id**, **tag_ids**, **status**: structured filters
    - **limit**, **offset**: pagination over the ranked hits
    """
    filters = SearchFilters(
        keyword=keyword,
        institution_id=institution_id,
        tag_ids=tag_ids or [],
        status=status,
        limit=limit,
        offset=offset,
    )
    result = await service.search(filters, session_id=x_session_id)
    return SupportSearchResponse(
        results=[
            SupportSearchHit(program=program_read(hit.relations), score=hit.score, match_type=hit.match_type)
            for hit in result.hits
        ],
        total=result.total,
        query=result.query,
    )


@router.get(
    "/popular",
    response_model=List[PopularQueryRead],
    summary="Popular Search Queries",
    description="Most frequent recorded search queries with their average response time.",
)
async def popular_queries(
    service: SearchServiceDep,
    limit: int = Query(default=10, ge=1, le=100),
    source: Optional[str] = Query(default=SEARCH_SOURCE),
) -> List[PopularQueryRead]:
    return [PopularQueryRead(**row) for row in await service.popular_queries(limit=limit, source=source)]


@router.post(
    "/embeddings/generate",
    response_model=EmbeddingRunRead,
    summary="Generate Missing Embeddings",
    description="Embed every support program that has no embedding yet. Admin only.",
    responses={
        200: {"description": "Run finished; check error_count"},
        401: {"description": "Authentication required"},
        403: {"description": "Admin role required"},
    },
)
async def generate_missing_embeddings(
    service: ProgramEmbeddingServiceDep,
    _admin: str = Depends(require_admin),
) -> EmbeddingRunRead:
    summary = await service.generate_missing_embeddings()
    return EmbeddingRunRead(**summary.model_dump())


@router.post(
    "/embeddings/{program_id}",
    response_model=SupportProgramRead,
    summary="Generate Program Embedding",
    description="(Re)generate the embedding of one support program. Admin only.",
    responses={404: {"description": "Support program not found"}, 502: {"description": "Embedding API failed"}},
)
async def generate_program_embedding(
    program_id: int,
    service: ProgramEmbeddingServiceDep,
    _admin: str = Depends(require_admin),
) -> SupportProgramRead:
    program = await service.generate_program_embedding(program_id)
    return program_read((await service.repo.load_relations([program]))[0])

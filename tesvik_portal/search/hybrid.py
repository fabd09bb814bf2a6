"""Hybrid (keyword + semantic) support-program search.

Structured filters narrow the candidate set in the database; ranking is done
in Python so that the same code runs on PostgreSQL and SQLite:

- keyword score: share of query tokens found as whole words in the program
  text, where a token found in the title counts double
- semantic score: cosine similarity between the query embedding and the
  program embedding
- final score: mean of the available components
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from tesvik_portal.clients.openai_embeddings import Embedder
from tesvik_portal.core.database.entities.analytics import SearchAnalytics
from tesvik_portal.core.database.entities.support_programs import SupportProgram
from tesvik_portal.core.database.repositories.analytics import SearchAnalyticsRepository
from tesvik_portal.core.database.repositories.support_programs import ProgramRelations, SupportProgramRepository
from tesvik_portal.core.errors import PortalError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.monitoring import log_search
from tesvik_portal.core.text import cosine_similarity, fold, tokenize

logger = get_logger(__name__)

SEARCH_SOURCE = "support_search"
MIN_ANALYTICS_QUERY_LENGTH = 2


class SearchFilters(BaseModel):
    keyword: Optional[str] = None
    institution_id: Optional[int] = None
    tag_ids: List[int] = Field(default_factory=list)
    status: Optional[str] = Field(default=None, pattern="^(open|closed)$")
    limit: int = Field(default=50, ge=1)
    offset: int = Field(default=0, ge=0)

    def has_any(self) -> bool:
        return bool((self.keyword and self.keyword.strip()) or self.institution_id or self.tag_ids)


class RankedProgram(BaseModel):
    program_id: int
    score: float
    match_type: str


@dataclass
class SearchHit:
    relations: ProgramRelations
    score: float
    match_type: str


@dataclass
class SearchResult:
    hits: List[SearchHit]
    total: int
    query: Optional[str] = None


def keyword_score(query_tokens: Sequence[str], program: SupportProgram) -> float:
    """Share of query tokens present in the program; a title hit counts double.

    Whole tokens are compared after Turkish case and diacritic folding, so
    ``teşvik`` matches ``TESVIK`` but ``art`` does not match ``kart``. The
    result is in ``[0, 1]``.
    """
    if not query_tokens:
        return 0.0
    title = {fold(t) for t in tokenize(program.title)}
    body = {
        fold(t) for t in tokenize(" ".join(filter(None, [program.description, program.eligibility_criteria])))
    }
    points = 0.0
    for token in query_tokens:
        folded = fold(token)
        if folded in title:
            points += 2
        elif folded in body:
            points += 1
    return points / (2 * len(query_tokens))


def rank_programs(
    programs: Sequence[SupportProgram],
    query: Optional[str],
    query_embedding: Optional[Sequence[float]] = None,
    semantic_threshold: float = 0.3,
) -> List[RankedProgram]:
    """Rank candidate programs for a query.

    Without a query every program is returned in its given order with score 0
    (``browse``). With a query, programs matching neither by keyword nor
    semantically (similarity below ``semantic_threshold``) are dropped.
    """
    if not query or not query.strip():
        return [RankedProgram(program_id=p.id, score=0.0, match_type="browse") for p in programs]

    query_tokens = tokenize(query, min_length=2) or tokenize(query)
    ranked = []
    for program in programs:
        kw = keyword_score(query_tokens, program)
        semantic = None
        if query_embedding is not None and program.embedding:
            similarity = cosine_similarity(query_embedding, program.embedding)
            if similarity >= semantic_threshold:
                semantic = similarity

        if kw > 0 and semantic is not None:
            ranked.append(RankedProgram(program_id=program.id, score=(kw + semantic) / 2, match_type="hybrid"))
        elif kw > 0:
            ranked.append(RankedProgram(program_id=program.id, score=kw, match_type="keyword"))
        elif semantic is not None:
            ranked.append(RankedProgram(program_id=program.id, score=semantic, match_type="semantic"))

    titles = {p.id: fold(p.title) for p in programs}
    ranked.sort(key=lambda r: (-r.score, titles[r.program_id]))
    return ranked


def analytics_query(filters: SearchFilters, institution_name: Optional[str]) -> str:
    parts = [
        filters.keyword.strip() if filters.keyword else None,
        institution_name,
        ",".join(str(t) for t in filters.tag_ids) if filters.tag_ids else None,
    ]
    return " | ".join(p for p in parts if p)


class HybridSearchService:
    def __init__(
        self,
        repo: SupportProgramRepository,
        analytics: Optional[SearchAnalyticsRepository] = None,
        embedder: Optional[Embedder] = None,
        *,
        semantic_threshold: float = 0.3,
        max_limit: int = 200,
    ) -> None:
        self.repo = repo
        self.analytics = analytics
        self.embedder = embedder
        self.semantic_threshold = semantic_threshold
        self.max_limit = max_limit

    async def _query_embedding(self, query: Optional[str]) -> Optional[List[float]]:
        if not query or not query.strip() or self.embedder is None:
            return None
        try:
            return await self.embedder.embed(query.strip())
        except PortalError as e:
            logger.warning(f"Query embedding failed, falling back to keyword search: {e}")
            return None

    async def search(
        self, filters: SearchFilters, *, session_id: Optional[str] = None, today: Optional[date] = None
    ) -> SearchResult:
        """Search support programs.

        Args:
            filters: Keyword and structured filters plus pagination
            session_id: Browser session id stored with the analytics row
            today: Reference date for the open/closed status filter

        Returns:
            The requested page of ranked hits and the total hit count.
        """
        started = time.perf_counter()
        candidates = await self.repo.filter_programs(
            institution_id=filters.institution_id,
            tag_ids=filters.tag_ids,
            status=filters.status,
            today=today,
        )
        query_embedding = await self._query_embedding(filters.keyword)
        ranked = rank_programs(candidates, filters.keyword, query_embedding, self.semantic_threshold)

        limit = min(filters.limit, self.max_limit)
        page = ranked[filters.offset : filters.offset + limit]

        elapsed_ms = (time.perf_counter() - started) * 1000
        match_types: Dict[str, int] = {}
        for r in ranked:
            match_types[r.match_type] = match_types.get(r.match_type, 0) + 1
        logger.debug(f"Support search returned {len(ranked)} programs in {elapsed_ms:.1f}ms: {match_types}")
        log_search(filters.keyword or "", len(ranked), elapsed_ms, match_types)

        if filters.has_any():
            institution_name = None
            if filters.institution_id:
                institutions = await self.repo.institutions_by_id([filters.institution_id])
                institution = institutions.get(filters.institution_id)
                institution_name = institution.name if institution else None
            await self.record_analytics(filters, institution_name, len(ranked), elapsed_ms, session_id)

        # Loaded after analytics: a failed analytics insert rolls back and expires the candidates
        programs = await self.repo.get_many([r.program_id for r in page])
        relations = await self.repo.load_relations(programs)
        by_id = {r.program_id: r for r in page}
        hits = [
            SearchHit(relations=rel, score=by_id[rel.program.id].score, match_type=by_id[rel.program.id].match_type)
            for rel in relations
        ]
        return SearchResult(hits=hits, total=len(ranked), query=filters.keyword)

    async def record_analytics(
        self,
        filters: SearchFilters,
        institution_name: Optional[str],
        result_count: int,
        elapsed_ms: float,
        session_id: Optional[str] = None,
    ) -> Optional[SearchAnalytics]:
        """Store one analytics row; failures are logged and never propagate."""
        if self.analytics is None:
            return None
        query = analytics_query(filters, institution_name)
        if len(query.strip()) < MIN_ANALYTICS_QUERY_LENGTH:
            return None
        try:
            return await self.analytics.create(
                SearchAnalytics(
                    query=query,
                    search_source=SEARCH_SOURCE,
                    total_response_time_ms=int(round(elapsed_ms)),
                    support_match_count=result_count,
                    session_id=session_id,
                    cache_key=json.dumps(
                        filters.model_dump(include={"keyword", "institution_id", "tag_ids", "status"}),
                        ensure_ascii=False,
                        sort_keys=True,
                    ),
                )
            )
        except Exception as e:
            logger.error(f"Error tracking search analytics: {e}")
            await self.analytics.session.rollback()
            return None

    async def popular_queries(self, limit: int = 10, source: Optional[str] = SEARCH_SOURCE) -> List[dict]:
        if self.analytics is None:
            return []
        rows = await self.analytics.popular_queries(limit=limit, source=source)
        return [
            {"query": query, "search_count": count, "avg_response_time_ms": round(avg, 1)}
            for query, count, avg in rows
        ]

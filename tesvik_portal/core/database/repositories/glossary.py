"""
Investor glossary repository.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tesvik_portal.core.text import turkish_lower

from ..entities.glossary import GlossaryTerm
from .base import SQLModelRepository


class GlossaryRepository(SQLModelRepository[GlossaryTerm]):
    default_order = (GlossaryTerm.term.asc(),)  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GlossaryTerm)

    async def get_by_term(self, term: str) -> Optional[GlossaryTerm]:
        result = await self.session.execute(select(GlossaryTerm).where(GlossaryTerm.term == term.strip()))
        return result.scalars().first()

    async def search(
        self,
        *,
        keyword: Optional[str] = None,
        letter: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[GlossaryTerm], int]:
        """Terms matching a keyword in term or definition and starting with ``letter``.

        The initial letter is compared with Turkish case rules, so ``i`` finds
        ``İhracat`` but not ``Ithalat``. Returns one page and the total count.
        """
        stmt = select(GlossaryTerm)
        if keyword and keyword.strip():
            pattern = f"%{keyword.strip()}%"
            stmt = stmt.where(
                or_(GlossaryTerm.term.ilike(pattern), GlossaryTerm.definition.ilike(pattern))  # type: ignore
            )
        result = await self.session.execute(stmt.order_by(*self.default_order))
        terms = list(result.scalars().all())
        if letter:
            initial = turkish_lower(letter.strip()[:1])
            terms = [t for t in terms if turkish_lower(t.term[:1]) == initial]
        end = offset + limit if limit is not None else None
        return terms[offset:end], len(terms)

"""
Support program repository.

Loads programs together with their institution, tags (with category names)
and attached files, and applies the structured filters used by the search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import delete, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.support_programs import (
    FileAttachment,
    Institution,
    SupportProgram,
    SupportProgramTag,
    Tag,
    TagCategory,
)
from .base import SQLModelRepository


@dataclass
class ProgramRelations:
    """A program with its related rows resolved."""

    program: SupportProgram
    institution: Optional[Institution] = None
    tags: List[tuple] = field(default_factory=list)  # (Tag, category name or None)
    files: List[FileAttachment] = field(default_factory=list)


class SupportProgramRepository(SQLModelRepository[SupportProgram]):
    """Repository for support programs and their link tables."""

    default_order = (SupportProgram.created_at.desc(),)  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SupportProgram)

    async def filter_programs(
        self,
        *,
        institution_id: Optional[int] = None,
        tag_ids: Optional[Sequence[int]] = None,
        status: Optional[str] = None,
        today: Optional[date] = None,
    ) -> List[SupportProgram]:
        """Return programs matching the structured filters, newest first.

        Args:
            institution_id: Only programs of this institution
            tag_ids: Programs carrying ANY of these tags
            status: ``open`` (no deadline or deadline not passed) or ``closed``
            today: Reference date for the status filter
        """
        stmt = select(SupportProgram)
        if institution_id is not None:
            stmt = stmt.where(SupportProgram.institution_id == institution_id)
        if tag_ids:
            tagged = select(SupportProgramTag.program_id).where(SupportProgramTag.tag_id.in_(list(tag_ids)))  # type: ignore
            stmt = stmt.where(SupportProgram.id.in_(tagged))  # type: ignore
        if status in ("open", "closed"):
            reference = today or date.today()
            if status == "open":
                stmt = stmt.where(
                    or_(
                        SupportProgram.application_deadline.is_(None),  # type: ignore
                        SupportProgram.application_deadline >= reference,  # type: ignore
                    )
                )
            else:
                stmt = stmt.where(SupportProgram.application_deadline < reference)  # type: ignore
        stmt = stmt.order_by(SupportProgram.created_at.desc(), SupportProgram.id.desc())  # type: ignore
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_many(self, ids: Sequence[int]) -> List[SupportProgram]:
        """Programs with the given ids, in the order of ``ids``; unknown ids are skipped."""
        if not ids:
            return []
        result = await self.session.execute(select(SupportProgram).where(SupportProgram.id.in_(list(ids))))  # type: ignore
        by_id = {p.id: p for p in result.scalars().all()}
        return [by_id[i] for i in ids if i in by_id]

    async def institutions_by_id(self, ids: Iterable[Optional[int]]) -> Dict[int, Institution]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        result = await self.session.execute(select(Institution).where(Institution.id.in_(wanted)))  # type: ignore
        return {inst.id: inst for inst in result.scalars().all()}

    async def load_relations(self, programs: Sequence[SupportProgram]) -> List[ProgramRelations]:
        """Resolve institution, tags and files for each program, preserving order."""
        if not programs:
            return []
        ids = [p.id for p in programs]
        institutions = await self.institutions_by_id(p.institution_id for p in programs)

        tag_rows = await self.session.execute(
            select(SupportProgramTag.program_id, Tag, TagCategory.name)
            .join(Tag, Tag.id == SupportProgramTag.tag_id)  # type: ignore
            .outerjoin(TagCategory, TagCategory.id == Tag.category_id)  # type: ignore
            .where(SupportProgramTag.program_id.in_(ids))  # type: ignore
            .order_by(Tag.name)
        )
        tags: Dict[int, List[tuple]] = {}
        for program_id, tag, category_name in tag_rows.all():
            tags.setdefault(program_id, []).append((tag, category_name))

        file_rows = await self.session.execute(
            select(FileAttachment)
            .where(FileAttachment.program_id.in_(ids))  # type: ignore
            .order_by(FileAttachment.display_order, FileAttachment.id)
        )
        files: Dict[int, List[FileAttachment]] = {}
        for attachment in file_rows.scalars().all():
            files.setdefault(attachment.program_id, []).append(attachment)

        return [
            ProgramRelations(
                program=p,
                institution=institutions.get(p.institution_id) if p.institution_id is not None else None,
                tags=tags.get(p.id, []),
                files=files.get(p.id, []),
            )
            for p in programs
        ]

    async def missing_tag_ids(self, tag_ids: Sequence[int]) -> List[int]:
        """The ids among ``tag_ids`` that have no tag row, in request order."""
        wanted = list(dict.fromkeys(tag_ids))
        if not wanted:
            return []
        result = await self.session.execute(select(Tag.id).where(Tag.id.in_(wanted)))  # type: ignore
        found = set(result.scalars().all())
        return [tag_id for tag_id in wanted if tag_id not in found]

    async def save_with_tags(self, program: SupportProgram, tag_ids: Optional[Sequence[int]] = None) -> SupportProgram:
        """Insert or update a program and, when ``tag_ids`` is given, replace its tags.

        Both happen in one transaction: a failing tag insert leaves no program
        row and no partial tag set behind.
        """
        self.session.add(program)
        try:
            if tag_ids is not None:
                await self.session.flush()
                await self.session.execute(
                    delete(SupportProgramTag).where(SupportProgramTag.program_id == program.id)  # type: ignore
                )
                for tag_id in dict.fromkeys(tag_ids):
                    self.session.add(SupportProgramTag(program_id=program.id, tag_id=tag_id))
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        await self.session.refresh(program)
        return program

    async def delete(self, entity_id: str | int) -> bool:
        program = await self.get_by_id(entity_id)
        if program is None:
            return False
        await self.session.execute(delete(SupportProgramTag).where(SupportProgramTag.program_id == program.id))  # type: ignore
        await self.session.execute(delete(FileAttachment).where(FileAttachment.program_id == program.id))  # type: ignore
        await self.session.delete(program)
        await self.session.commit()
        return True

    async def without_embedding(self) -> List[SupportProgram]:
        result = await self.session.execute(
            select(SupportProgram).where(SupportProgram.embedding.is_(None)).order_by(SupportProgram.id)  # type: ignore
        )
        return list(result.scalars().all())

    async def add_file(self, attachment: FileAttachment) -> FileAttachment:
        self.session.add(attachment)
        await self.session.commit()
        await self.session.refresh(attachment)
        return attachment


class InstitutionRepository(SQLModelRepository[Institution]):
    default_order = (Institution.name,)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Institution)


class TagRepository(SQLModelRepository[Tag]):
    default_order = (Tag.name,)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Tag)

    async def list_with_categories(self) -> List[tuple]:
        result = await self.session.execute(
            select(Tag, TagCategory.name)
            .outerjoin(TagCategory, TagCategory.id == Tag.category_id)  # type: ignore
            .order_by(TagCategory.display_order, Tag.name)
        )
        return list(result.all())

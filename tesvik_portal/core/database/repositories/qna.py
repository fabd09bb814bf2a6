"""
Soru-Sor question and admin notification address repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.content import EmailLog
from ..entities.qna import QnaAdminEmail, Question, QuestionStatus
from .base import SQLModelRepository


class QuestionRepository(SQLModelRepository[Question]):
    """Questions, newest first."""

    default_order = (Question.created_at.desc(), Question.id.desc())  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Question)

    async def list_by_status(
        self, status: Optional[QuestionStatus] = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Question]:
        return await self.list(limit=limit, offset=offset, filters={"status": status})

    async def email_logs(self, question_id: int) -> List[EmailLog]:
        result = await self.session.execute(
            select(EmailLog).where(EmailLog.question_id == question_id).order_by(EmailLog.created_at.asc())  # type: ignore
        )
        return list(result.scalars().all())

    async def delete(self, entity_id: str | int) -> bool:
        """Delete a question; its e-mail log rows are kept and detached."""
        question = await self.get_by_id(entity_id)
        if question is None:
            return False
        await self.session.execute(
            update(EmailLog).where(EmailLog.question_id == question.id).values(question_id=None)  # type: ignore
        )
        await self.session.delete(question)
        await self.session.commit()
        return True


class QnaAdminEmailRepository(SQLModelRepository[QnaAdminEmail]):
    default_order = (QnaAdminEmail.full_name.asc(),)  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, QnaAdminEmail)

    async def get_by_email(self, email: str) -> Optional[QnaAdminEmail]:
        result = await self.session.execute(
            select(QnaAdminEmail).where(QnaAdminEmail.email == email.strip().lower())
        )
        return result.scalars().first()

    async def active(self) -> List[QnaAdminEmail]:
        return await self.list(filters={"is_active": True})

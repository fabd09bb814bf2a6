"""
Soru-Sor question handling.

A submitted question is stored first and then announced to the active QnA
admin addresses. A mail failure at that point is logged and never loses the
question. Answering records who answered and when, and by default e-mails
the answer to the asker.
"""

from __future__ import annotations

from typing import Optional

from tesvik_portal.core.database.entities.qna import Question, QuestionStatus
from tesvik_portal.core.database.repositories.qna import QnaAdminEmailRepository, QuestionRepository
from tesvik_portal.core.errors import ConfigurationError, NotFoundError, ValidationFailedError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.models.io import QuestionAnswer, QuestionSubmit
from tesvik_portal.core.text import utc_now

from .notifications import QuestionNotifier

logger = get_logger(__name__)

# Answers in these states are final enough to send to the asker.
DELIVERABLE_STATUSES = (QuestionStatus.ANSWERED, QuestionStatus.APPROVED)


class QnaService:
    def __init__(
        self, questions: QuestionRepository, admins: QnaAdminEmailRepository, notifier: QuestionNotifier
    ) -> None:
        self.questions = questions
        self.admins = admins
        self.notifier = notifier

    async def submit(self, payload: QuestionSubmit) -> Question:
        question = await self.questions.create(Question(**payload.model_dump()))
        logger.info(f"Question {question.id} submitted from {question.province}")
        admins = await self.admins.active()
        if not admins:
            logger.warning(f"No active QnA admin address; question {question.id} was not announced")
            return question
        try:
            await self.notifier.new_question(question, admins)
        except ConfigurationError as e:
            logger.warning(f"Question {question.id} stored but not announced: {e}")
        return question

    async def get(self, question_id: int) -> Question:
        question = await self.questions.get_by_id(question_id)
        if question is None:
            raise NotFoundError(f"Question {question_id} not found")
        return question

    async def answer(self, question_id: int, payload: QuestionAnswer, admin_id: Optional[str]) -> Question:
        """Store an answer and, when asked to and the status allows it, e-mail it.

        Raises:
            NotFoundError: The question does not exist.
            ValidationFailedError: ``status`` is ``unanswered``.
            ConfigurationError: The mail provider has no API key.
        """
        if payload.status == QuestionStatus.UNANSWERED:
            raise ValidationFailedError(
                "An answer cannot leave the question unanswered", details={"status": QuestionStatus.UNANSWERED.value}
            )
        question = await self.get(question_id)
        question.answer = payload.answer.strip()
        question.status = payload.status
        question.admin_notes = payload.admin_notes
        question.answered_by = admin_id
        question.answered_at = utc_now()
        question = await self.questions.update(question)

        if payload.notify_user and payload.status in DELIVERABLE_STATUSES:
            if await self.notifier.answer(question):
                question.sent_to_user = True
                question = await self.questions.update(question)
        return question

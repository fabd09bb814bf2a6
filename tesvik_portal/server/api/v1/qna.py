"""
API endpoints for Soru-Sor questions.

Anyone can submit a question; the response only acknowledges it. Listing,
answering and deleting questions and managing the addresses notified about
new questions are admin only.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.qna import QnaAdminEmail, QuestionStatus
from tesvik_portal.core.database.repositories.qna import QnaAdminEmailRepository, QuestionRepository
from tesvik_portal.core.errors import NotFoundError, ValidationFailedError
from tesvik_portal.core.models.io import (
    QnaAdminEmailCreate,
    QnaAdminEmailRead,
    QnaAdminEmailUpdate,
    QnaEmailLogRead,
    QuestionAnswer,
    QuestionRead,
    QuestionReceipt,
    QuestionSubmit,
)
from tesvik_portal.server.core.security import require_admin
from tesvik_portal.server.services.deps import QnaServiceDep

router = APIRouter(tags=["qna"])


@router.post(
    "/questions",
    response_model=QuestionReceipt,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Question",
    description="Submit a question. The active QnA admin addresses are notified by e-mail.",
)
async def submit_question(payload: QuestionSubmit, service: QnaServiceDep) -> QuestionReceipt:
    return QuestionReceipt.model_validate(await service.submit(payload))


@router.get(
    "/questions",
    response_model=List[QuestionRead],
    summary="List Questions",
    description="Retrieve questions, newest first, optionally filtered by status. Admin only.",
)
async def list_questions(
    status_filter: Optional[QuestionStatus] = Query(default=None, alias="status"),
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[QuestionRead]:
    questions = await QuestionRepository(session).list_by_status(status_filter, limit=limit, offset=offset)
    return [QuestionRead.model_validate(q) for q in questions]


@router.get(
    "/questions/{question_id}",
    response_model=QuestionRead,
    summary="Get Question",
    responses={404: {"description": "Question not found"}},
)
async def get_question(
    question_id: int,
    service: QnaServiceDep,
    _admin: str = Depends(require_admin),
) -> QuestionRead:
    return QuestionRead.model_validate(await service.get(question_id))


@router.post(
    "/questions/{question_id}/answer",
    response_model=QuestionRead,
    summary="Answer Question",
    description="Store the answer and e-mail it to the asker unless the answer is returned for correction. Admin only.",
    responses={
        400: {"description": "Status 'unanswered' given for an answer"},
        404: {"description": "Question not found"},
        500: {"description": "E-mail provider is not configured"},
    },
)
async def answer_question(
    question_id: int,
    payload: QuestionAnswer,
    service: QnaServiceDep,
    admin_id: str = Depends(require_admin),
) -> QuestionRead:
    return QuestionRead.model_validate(await service.answer(question_id, payload, admin_id))


@router.get(
    "/questions/{question_id}/email-logs",
    response_model=List[QnaEmailLogRead],
    summary="Question E-mail Log",
    description="Delivery attempts of the e-mails sent about a question. Admin only.",
    responses={404: {"description": "Question not found"}},
)
async def question_email_logs(
    question_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[QnaEmailLogRead]:
    repo = QuestionRepository(session)
    if await repo.get_by_id(question_id) is None:
        raise NotFoundError(f"Question {question_id} not found")
    return [QnaEmailLogRead.model_validate(log) for log in await repo.email_logs(question_id)]


@router.delete(
    "/questions/{question_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Question",
    responses={404: {"description": "Question not found"}},
)
async def delete_question(
    question_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    if not await QuestionRepository(session).delete(question_id):
        raise NotFoundError(f"Question {question_id} not found")


@router.get("/admin-emails", response_model=List[QnaAdminEmailRead], summary="List QnA Admin Addresses")
async def list_admin_emails(
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[QnaAdminEmailRead]:
    return [QnaAdminEmailRead.model_validate(a) for a in await QnaAdminEmailRepository(session).list()]


@router.post(
    "/admin-emails",
    response_model=QnaAdminEmailRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add QnA Admin Address",
    responses={400: {"description": "Address already registered"}},
)
async def create_admin_email(
    payload: QnaAdminEmailCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> QnaAdminEmailRead:
    repo = QnaAdminEmailRepository(session)
    email = payload.email.lower()
    if await repo.get_by_email(email) is not None:
        raise ValidationFailedError(f"{email} is already registered", details={"email": email})
    admin_email = await repo.create(QnaAdminEmail(**payload.model_dump(exclude={"email"}), email=email))
    return QnaAdminEmailRead.model_validate(admin_email)


@router.patch(
    "/admin-emails/{admin_email_id}",
    response_model=QnaAdminEmailRead,
    summary="Update QnA Admin Address",
    responses={404: {"description": "Address not found"}},
)
async def update_admin_email(
    admin_email_id: int,
    payload: QnaAdminEmailUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> QnaAdminEmailRead:
    repo = QnaAdminEmailRepository(session)
    admin_email = await repo.get_by_id(admin_email_id)
    if admin_email is None:
        raise NotFoundError(f"QnA admin address {admin_email_id} not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(admin_email, key, value)
    return QnaAdminEmailRead.model_validate(await repo.update(admin_email))


@router.delete(
    "/admin-emails/{admin_email_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove QnA Admin Address",
    responses={404: {"description": "Address not found"}},
)
async def delete_admin_email(
    admin_email_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    if not await QnaAdminEmailRepository(session).delete(admin_email_id):
        raise NotFoundError(f"QnA admin address {admin_email_id} not found")

"""
Question & answer (Soru-Sor) entity models.

Investors submit questions through the public form; admins answer them and
the answer is e-mailed back to the asker. The active addresses in
``qna_admin_emails`` are told about every new question.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


class QuestionStatus(str, Enum):
    UNANSWERED = "unanswered"
    ANSWERED = "answered"
    RETURNED = "returned"
    APPROVED = "approved"


class Question(Base, table=True):
    """Question submitted through the Soru-Sor form.

    Table: questions
    """

    __tablename__ = "questions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str
    email: str = Field(index=True)
    phone: Optional[str] = Field(default=None)
    province: str = Field(index=True)
    category: Optional[str] = Field(default=None)
    question: str
    answer: Optional[str] = Field(default=None)
    status: QuestionStatus = Field(default=QuestionStatus.UNANSWERED, index=True)
    admin_notes: Optional[str] = Field(default=None)
    answered_by: Optional[str] = Field(default=None, description="User id of the admin who answered")
    answered_at: Optional[datetime] = timestamp_field(nullable=True)
    sent_to_user: bool = Field(default=False, description="The answer was e-mailed to the asker")
    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(on_update=True)


class QnaAdminEmail(Base, table=True):
    """Address notified about new questions.

    Table: qna_admin_emails
    """

    __tablename__ = "qna_admin_emails"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    full_name: str
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = timestamp_field()

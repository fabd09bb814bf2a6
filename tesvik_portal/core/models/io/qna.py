"""
Soru-Sor question, admin notification address and glossary I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tesvik_portal.core.database.entities.content import EmailStatus
from tesvik_portal.core.database.entities.qna import QuestionStatus

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class QuestionSubmit(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=30)
    province: str = Field(min_length=1)
    category: Optional[str] = None
    question: str = Field(min_length=10, max_length=5000)


class QuestionReceipt(BaseModel):
    """Acknowledgement returned to the asker."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    status: QuestionStatus
    created_at: datetime


class QuestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    province: str
    category: Optional[str] = None
    question: str
    answer: Optional[str] = None
    status: QuestionStatus
    admin_notes: Optional[str] = None
    answered_by: Optional[str] = None
    answered_at: Optional[datetime] = None
    sent_to_user: bool
    created_at: datetime
    updated_at: datetime


class QuestionAnswer(BaseModel):
    answer: str = Field(min_length=1)
    status: QuestionStatus = QuestionStatus.ANSWERED
    admin_notes: Optional[str] = None
    notify_user: bool = Field(default=True, description="E-mail the answer to the asker")


class QnaEmailLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient: str
    subject: str
    status: EmailStatus
    error_message: Optional[str] = None
    created_at: datetime


class QnaAdminEmailRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    is_active: bool
    created_at: datetime


class QnaAdminEmailCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(pattern=EMAIL_PATTERN)
    full_name: str = Field(min_length=1)
    is_active: bool = True


class QnaAdminEmailUpdate(BaseModel):
    full_name: Optional[str] = None
    is_active: Optional[bool] = None


class GlossaryTermRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    term: str
    definition: str
    created_at: datetime
    updated_at: datetime


class GlossaryTermCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    term: str = Field(min_length=1, max_length=200)
    definition: str = Field(min_length=1)


class GlossaryTermUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    term: Optional[str] = Field(default=None, min_length=1, max_length=200)
    definition: Optional[str] = Field(default=None, min_length=1)


class GlossaryPage(BaseModel):
    total: int
    items: List[GlossaryTermRead]

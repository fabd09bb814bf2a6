"""
Published content entity models.

Announcements shown on the landing page, the legislation library, the
newsletter subscriber list and the log of notification e-mails sent to
subscribers and to question askers and admins.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


class DocumentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EmailStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


class Announcement(Base, table=True):
    """Announcement from an institution.

    Table: announcements
    """

    __tablename__ = "announcements"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    institution_name: str
    institution_logo: Optional[str] = Field(default=None)
    title: str
    detail: str
    announcement_date: date = Field(index=True)
    external_link: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True, index=True)
    display_order: int = Field(default=0)
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field(on_update=True)


class LegalDocument(Base, table=True):
    """Law, regulation, communiqué or decree in the legislation library.

    Table: legal_documents
    """

    __tablename__ = "legal_documents"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    description: Optional[str] = Field(default=None)
    document_type: str = Field(index=True, description="law, regulation, decree, communique, ...")
    document_number: Optional[str] = Field(default=None)
    ministry: Optional[str] = Field(default=None)
    publication_date: Optional[date] = Field(default=None)
    file_url: Optional[str] = Field(default=None)
    external_url: Optional[str] = Field(default=None)
    keywords: Optional[str] = Field(default=None, description="Comma separated keywords")
    status: DocumentStatus = Field(default=DocumentStatus.ACTIVE, index=True)
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field(on_update=True)


class NewsletterSubscriber(Base, table=True):
    """E-mail address subscribed to announcement notifications.

    Table: newsletter_subscribers
    """

    __tablename__ = "newsletter_subscribers"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    is_active: bool = Field(default=True, index=True)
    subscribed_at: datetime = timestamp_field()
    unsubscribed_at: Optional[datetime] = timestamp_field(nullable=True)


class EmailLog(Base, table=True):
    """One delivery attempt of a notification e-mail.

    Table: email_logs
    """

    __tablename__ = "email_logs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    announcement_id: Optional[int] = Field(
        default=None, foreign_key="announcements.id", ondelete="SET NULL", index=True
    )
    question_id: Optional[int] = Field(default=None, foreign_key="questions.id", ondelete="SET NULL", index=True)
    recipient: str
    subject: str
    status: EmailStatus
    error_message: Optional[str] = Field(default=None)
    created_at: datetime = timestamp_field(index=True)

"""
Announcement, legal document and newsletter I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tesvik_portal.core.database.entities.content import DocumentStatus


class AnnouncementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    institution_name: str
    institution_logo: Optional[str] = None
    title: str
    detail: str
    announcement_date: date
    external_link: Optional[str] = None
    is_active: bool
    display_order: int
    created_at: datetime
    updated_at: datetime


class AnnouncementCreate(BaseModel):
    institution_name: str = Field(min_length=1)
    institution_logo: Optional[str] = None
    title: str = Field(min_length=1)
    detail: str = Field(min_length=1)
    announcement_date: date
    external_link: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class AnnouncementUpdate(BaseModel):
    institution_name: Optional[str] = None
    institution_logo: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    announcement_date: Optional[date] = None
    external_link: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class NotificationReport(BaseModel):
    """Outcome of e-mailing an announcement to the subscribers."""

    announcement_id: int
    recipients: int
    sent: int
    failed: int


class LegalDocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    document_type: str
    document_number: Optional[str] = None
    ministry: Optional[str] = None
    publication_date: Optional[date] = None
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    keywords: Optional[str] = None
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime


class LegalDocumentCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    document_type: str = Field(min_length=1)
    document_number: Optional[str] = None
    ministry: Optional[str] = None
    publication_date: Optional[date] = None
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    keywords: Optional[str] = None
    status: DocumentStatus = DocumentStatus.ACTIVE


class LegalDocumentUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    ministry: Optional[str] = None
    publication_date: Optional[date] = None
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    keywords: Optional[str] = None
    status: Optional[DocumentStatus] = None


class LegalDocumentStatusUpdate(BaseModel):
    status: DocumentStatus


class NewsletterRequest(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Subscriber e-mail address")


class NewsletterSubscriberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    is_active: bool
    subscribed_at: datetime
    unsubscribed_at: Optional[datetime] = None

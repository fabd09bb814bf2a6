"""
Repositories for published content: announcements, legal documents,
newsletter subscribers and e-mail logs.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tesvik_portal.core.text import utc_now

from ..entities.content import (
    Announcement,
    DocumentStatus,
    EmailLog,
    LegalDocument,
    NewsletterSubscriber,
)
from .base import SQLModelRepository


class AnnouncementRepository(SQLModelRepository[Announcement]):
    """Announcements ordered by ``display_order`` then newest date first."""

    default_order = (Announcement.display_order.asc(), Announcement.announcement_date.desc())  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Announcement)

    async def list_active(self, limit: Optional[int] = None) -> List[Announcement]:
        return await self.list(limit=limit, filters={"is_active": True})

    async def delete(self, entity_id: str | int) -> bool:
        """Delete an announcement; its e-mail log rows are kept and detached."""
        announcement = await self.get_by_id(entity_id)
        if announcement is None:
            return False
        await self.session.execute(
            update(EmailLog).where(EmailLog.announcement_id == announcement.id).values(announcement_id=None)  # type: ignore
        )
        await self.session.delete(announcement)
        await self.session.commit()
        return True


class LegalDocumentRepository(SQLModelRepository[LegalDocument]):
    default_order = (LegalDocument.publication_date.desc(), LegalDocument.id.desc())  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, LegalDocument)

    async def search(
        self,
        *,
        document_type: Optional[str] = None,
        keyword: Optional[str] = None,
        active_only: bool = True,
    ) -> List[LegalDocument]:
        """Filter documents by type and a keyword matched against title, description and keywords."""
        stmt = select(LegalDocument)
        if active_only:
            stmt = stmt.where(LegalDocument.status == DocumentStatus.ACTIVE)
        if document_type:
            stmt = stmt.where(LegalDocument.document_type == document_type)
        if keyword:
            pattern = f"%{keyword.strip()}%"
            stmt = stmt.where(
                or_(
                    LegalDocument.title.ilike(pattern),  # type: ignore
                    LegalDocument.description.ilike(pattern),  # type: ignore
                    LegalDocument.keywords.ilike(pattern),  # type: ignore
                    LegalDocument.document_number.ilike(pattern),  # type: ignore
                )
            )
        stmt = stmt.order_by(*self.default_order)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class NewsletterRepository(SQLModelRepository[NewsletterSubscriber]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, NewsletterSubscriber)

    async def get_by_email(self, email: str) -> Optional[NewsletterSubscriber]:
        result = await self.session.execute(
            select(NewsletterSubscriber).where(NewsletterSubscriber.email == email.strip().lower())
        )
        return result.scalars().first()

    async def subscribe(self, email: str) -> NewsletterSubscriber:
        """Subscribe an address; re-subscribing an inactive address reactivates it."""
        normalized = email.strip().lower()
        subscriber = await self.get_by_email(normalized)
        if subscriber is None:
            return await self.create(NewsletterSubscriber(email=normalized))
        if not subscriber.is_active:
            subscriber.is_active = True
            subscriber.subscribed_at = utc_now()
            subscriber.unsubscribed_at = None
            return await self.update(subscriber)
        return subscriber

    async def unsubscribe(self, email: str) -> bool:
        subscriber = await self.get_by_email(email)
        if subscriber is None or not subscriber.is_active:
            return False
        subscriber.is_active = False
        subscriber.unsubscribed_at = utc_now()
        await self.update(subscriber)
        return True

    async def active_subscribers(self) -> List[NewsletterSubscriber]:
        return await self.list(filters={"is_active": True})


class EmailLogRepository(SQLModelRepository[EmailLog]):
    default_order = (EmailLog.created_at.desc(),)  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EmailLog)

"""Unit tests for announcement, legal document and newsletter repositories."""

from __future__ import annotations

from datetime import date

import pytest
import pytest_asyncio

from tesvik_portal.core.database.entities.content import Announcement, DocumentStatus, LegalDocument
from tesvik_portal.core.database.repositories.content import (
    AnnouncementRepository,
    LegalDocumentRepository,
    NewsletterRepository,
)

pytestmark = pytest.mark.asyncio


def _announcement(title: str, day: int, order: int = 0, active: bool = True) -> Announcement:
    return Announcement(
        institution_name="Sanayi ve Teknoloji Bakanlığı",
        title=title,
        detail="Detay",
        announcement_date=date(2025, 3, day),
        display_order=order,
        is_active=active,
    )


class TestAnnouncementRepository:
    async def test_list_active_orders_by_display_order_then_newest(self, session):
        repo = AnnouncementRepository(session)
        for announcement in [
            _announcement("old", 1),
            _announcement("new", 20),
            _announcement("pinned", 5, order=-1),
            _announcement("hidden", 25, active=False),
        ]:
            await repo.create(announcement)

        assert [a.title for a in await repo.list_active()] == ["pinned", "new", "old"]
        assert len(await repo.list()) == 4


class TestLegalDocumentRepository:
    @pytest_asyncio.fixture
    async def documents(self, session):
        repo = LegalDocumentRepository(session)
        await repo.create(
            LegalDocument(
                title="Yatırımlarda Devlet Yardımları Hakkında Karar",
                document_type="decree",
                document_number="2012/3305",
                keywords="teşvik, yatırım",
                publication_date=date(2012, 6, 19),
            )
        )
        await repo.create(
            LegalDocument(title="Ar-Ge Kanunu", document_type="law", document_number="5746", publication_date=date(2008, 3, 12))
        )
        await repo.create(
            LegalDocument(title="Mülga Tebliğ", document_type="communique", status=DocumentStatus.INACTIVE)
        )
        return repo

    async def test_active_only_by_default(self, documents):
        titles = [d.title for d in await documents.search()]
        assert "Mülga Tebliğ" not in titles
        assert titles[0] == "Yatırımlarda Devlet Yardımları Hakkında Karar"

    async def test_filter_by_type(self, documents):
        assert [d.document_number for d in await documents.search(document_type="law")] == ["5746"]

    async def test_keyword_matches_number_and_keywords(self, documents):
        assert [d.document_type for d in await documents.search(keyword="3305")] == ["decree"]
        assert [d.document_type for d in await documents.search(keyword="yatırım")] == ["decree"]

    async def test_include_inactive(self, documents):
        assert len(await documents.search(active_only=False)) == 3


class TestNewsletterRepository:
    async def test_subscribe_is_idempotent(self, session):
        repo = NewsletterRepository(session)
        first = await repo.subscribe("Ali@Example.com ")
        second = await repo.subscribe("ali@example.com")
        assert first.id == second.id
        assert first.email == "ali@example.com"
        assert len(await repo.active_subscribers()) == 1

    async def test_unsubscribe_and_reactivate(self, session):
        repo = NewsletterRepository(session)
        await repo.subscribe("ayse@example.com")

        assert await repo.unsubscribe("ayse@example.com") is True
        assert await repo.unsubscribe("ayse@example.com") is False
        subscriber = await repo.get_by_email("ayse@example.com")
        assert subscriber.is_active is False
        assert subscriber.unsubscribed_at is not None
        assert await repo.active_subscribers() == []

        reactivated = await repo.subscribe("ayse@example.com")
        assert reactivated.is_active is True
        assert reactivated.unsubscribed_at is None

    async def test_unsubscribe_unknown_address(self, session):
        assert await NewsletterRepository(session).unsubscribe("nobody@example.com") is False

"""Unit tests for announcement e-mail notifications."""

from __future__ import annotations

from datetime import date

import pytest

from tesvik_portal.clients.errors import EmailDeliveryError
from tesvik_portal.core.database.entities.content import Announcement, EmailStatus
from tesvik_portal.core.database.repositories.content import (
    AnnouncementRepository,
    EmailLogRepository,
    NewsletterRepository,
)
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.server.services.notifications import AnnouncementNotifier, render_announcement


class FakeMailer:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.sent = []

    async def send(self, to, subject, html):
        if to in self.failing:
            raise EmailDeliveryError("E-mail delivery failed: 422", upstream_status=422)
        self.sent.append((to, subject, html))
        return "msg"


def announcement(**kwargs) -> Announcement:
    values = dict(
        institution_name="KOSGEB",
        title="Yeni <Destek> Çağrısı",
        detail="Başvurular açıldı.",
        announcement_date=date(2025, 4, 1),
        external_link="https://example.com/duyuru?a=1&b=2",
    )
    values.update(kwargs)
    return Announcement(**values)


def test_render_announcement_escapes_html():
    html = render_announcement(announcement())
    assert "<h2>Yeni &lt;Destek&gt; Çağrısı</h2>" in html
    assert "01.04.2025" in html
    assert 'href="https://example.com/duyuru?a=1&amp;b=2"' in html
    assert "Detaylı bilgi" not in render_announcement(announcement(external_link=None))


def make_notifier(session, mailer) -> AnnouncementNotifier:
    return AnnouncementNotifier(
        AnnouncementRepository(session), NewsletterRepository(session), EmailLogRepository(session), mailer
    )


async def test_notify_sends_to_active_subscribers_and_logs(session):
    stored = await AnnouncementRepository(session).create(announcement())
    subscribers = NewsletterRepository(session)
    for email in ["a@example.com", "b@example.com", "c@example.com"]:
        await subscribers.subscribe(email)
    await subscribers.unsubscribe("c@example.com")

    mailer = FakeMailer(failing={"b@example.com"})
    report = await make_notifier(session, mailer).notify(stored.id)

    assert (report.recipients, report.sent, report.failed) == (2, 1, 1)
    assert [(to, subject) for to, subject, _ in mailer.sent] == [
        ("a@example.com", "Yeni Duyuru: Yeni <Destek> Çağrısı")
    ]
    logs = {log.recipient: log for log in await EmailLogRepository(session).list()}
    assert logs["a@example.com"].status == EmailStatus.SENT
    assert logs["b@example.com"].status == EmailStatus.FAILED
    assert "422" in logs["b@example.com"].error_message


async def test_notify_unknown_announcement(session):
    with pytest.raises(NotFoundError):
        await make_notifier(session, FakeMailer()).notify(404)

"""
Notification e-mails.

Announcements go to every active newsletter subscriber, one message per
recipient. New Soru-Sor questions go to the active QnA admin addresses and an
answer goes back to the asker. Every attempt is recorded in ``email_logs``; a
failed delivery is logged and counted and does not stop the remaining ones.
"""

from __future__ import annotations

from html import escape
from typing import List

from tesvik_portal.clients.errors import EmailDeliveryError
from tesvik_portal.clients.mailer import ResendEmailClient
from tesvik_portal.core.database.entities.content import Announcement, EmailLog, EmailStatus
from tesvik_portal.core.database.entities.qna import QnaAdminEmail, Question
from tesvik_portal.core.database.repositories.content import (
    AnnouncementRepository,
    EmailLogRepository,
    NewsletterRepository,
)
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.models.io import NotificationReport

logger = get_logger(__name__)

SUBJECT_PREFIX = "Yeni Duyuru"
NEW_QUESTION_SUBJECT = "Yeni Soru"
ANSWER_SUBJECT = "Sorunuza Yanıt Geldi - Teşvik Portal"


def render_announcement(announcement: Announcement) -> str:
    link = ""
    if announcement.external_link:
        link = f'<p><a href="{escape(announcement.external_link)}">Detaylı bilgi</a></p>'
    return (
        f"<h2>{escape(announcement.title)}</h2>"
        f"<p><strong>{escape(announcement.institution_name)}</strong> - "
        f"{announcement.announcement_date.strftime('%d.%m.%Y')}</p>"
        f"<p>{escape(announcement.detail)}</p>"
        f"{link}"
    )


def _paragraphs(text: str) -> str:
    return escape(text).replace("\n", "<br>")


def render_new_question(question: Question) -> str:
    return (
        "<h2>Yeni Soru Geldi</h2>"
        f"<p><strong>Gönderen:</strong> {escape(question.full_name)}</p>"
        f"<p><strong>E-posta:</strong> {escape(question.email)}</p>"
        f"<p><strong>Telefon:</strong> {escape(question.phone or 'Belirtilmemiş')}</p>"
        f"<p><strong>İl:</strong> {escape(question.province)}</p>"
        f"<p><strong>Soru:</strong></p><div>{_paragraphs(question.question)}</div>"
        f"<p><strong>Gönderilme Tarihi:</strong> {question.created_at.strftime('%d.%m.%Y %H:%M')}</p>"
    )


def render_answer(question: Question) -> str:
    return (
        "<h2>Sorunuz Yanıtlandı</h2>"
        f"<p>Merhaba {escape(question.full_name)},</p>"
        "<p>Göndermiş olduğunuz soru yanıtlanmıştır:</p>"
        f"<h3>Sorunuz:</h3><p>{_paragraphs(question.question)}</p>"
        f"<h3>Yanıt:</h3><p>{_paragraphs(question.answer or '')}</p>"
        "<p>İyi günler dileriz,<br>Teşvik Portal Ekibi</p>"
    )


async def deliver(
    mailer: ResendEmailClient, logs: EmailLogRepository, recipient: str, subject: str, html: str, **links
) -> bool:
    """Send one message and record the attempt; ``links`` fill the log's foreign keys.

    Returns whether the message was accepted. ``ConfigurationError`` (no API
    key) is raised, not logged.
    """
    try:
        await mailer.send(recipient, subject, html)
    except EmailDeliveryError as e:
        logger.error(f"Failed to send '{subject}' to {recipient}: {e}")
        await logs.create(
            EmailLog(recipient=recipient, subject=subject, status=EmailStatus.FAILED, error_message=str(e), **links)
        )
        return False
    await logs.create(EmailLog(recipient=recipient, subject=subject, status=EmailStatus.SENT, **links))
    return True


class AnnouncementNotifier:
    def __init__(
        self,
        announcements: AnnouncementRepository,
        subscribers: NewsletterRepository,
        logs: EmailLogRepository,
        mailer: ResendEmailClient,
    ) -> None:
        self.announcements = announcements
        self.subscribers = subscribers
        self.logs = logs
        self.mailer = mailer

    async def notify(self, announcement_id: int) -> NotificationReport:
        """E-mail an announcement to all active subscribers.

        Raises:
            NotFoundError: The announcement does not exist.
            ConfigurationError: The mail provider has no API key.
        """
        announcement = await self.announcements.get_by_id(announcement_id)
        if announcement is None:
            raise NotFoundError(f"Announcement {announcement_id} not found")

        recipients = await self.subscribers.active_subscribers()
        subject = f"{SUBJECT_PREFIX}: {announcement.title}"
        html = render_announcement(announcement)

        sent = 0
        for subscriber in recipients:
            if await deliver(self.mailer, self.logs, subscriber.email, subject, html, announcement_id=announcement_id):
                sent += 1

        logger.info(f"Announcement {announcement_id} sent to {sent}/{len(recipients)} subscribers")
        return NotificationReport(
            announcement_id=announcement_id, recipients=len(recipients), sent=sent, failed=len(recipients) - sent
        )


class QuestionNotifier:
    def __init__(self, logs: EmailLogRepository, mailer: ResendEmailClient) -> None:
        self.logs = logs
        self.mailer = mailer

    async def new_question(self, question: Question, admins: List[QnaAdminEmail]) -> int:
        """Tell each admin address about a new question; returns the number sent."""
        subject = f"{NEW_QUESTION_SUBJECT}: {question.province} - {question.full_name}"
        html = render_new_question(question)
        sent = 0
        for admin in admins:
            if await deliver(self.mailer, self.logs, admin.email, subject, html, question_id=question.id):
                sent += 1
        logger.info(f"Question {question.id} announced to {sent}/{len(admins)} admins")
        return sent

    async def answer(self, question: Question) -> bool:
        """E-mail the answer to the asker."""
        return await deliver(
            self.mailer, self.logs, question.email, ANSWER_SUBJECT, render_answer(question), question_id=question.id
        )

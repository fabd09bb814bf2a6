"""Unit tests for Soru-Sor question handling and its e-mails."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tesvik_portal.clients.errors import EmailDeliveryError
from tesvik_portal.core.database.entities.content import EmailStatus
from tesvik_portal.core.database.entities.qna import QnaAdminEmail, Question, QuestionStatus
from tesvik_portal.core.database.repositories.content import EmailLogRepository
from tesvik_portal.core.database.repositories.qna import QnaAdminEmailRepository, QuestionRepository
from tesvik_portal.core.errors import ConfigurationError, NotFoundError, ValidationFailedError
from tesvik_portal.core.models.io import QuestionAnswer, QuestionSubmit
from tesvik_portal.server.services.notifications import QuestionNotifier, render_answer, render_new_question
from tesvik_portal.server.services.qna import QnaService

ADMIN_ID = "11111111-1111-1111-1111-111111111111"


class FakeMailer:
    def __init__(self, failing=(), error=None):
        self.failing = set(failing)
        self.error = error
        self.sent = []

    async def send(self, to, subject, html):
        if self.error is not None:
            raise self.error
        if to in self.failing:
            raise EmailDeliveryError("E-mail delivery failed: 422", upstream_status=422)
        self.sent.append((to, subject, html))
        return "msg"


def submission(**fields) -> QuestionSubmit:
    values = dict(
        full_name="Ayşe Yılmaz",
        email="ayse@example.com",
        phone="0555 000 00 00",
        province="Konya",
        question="Konya'da makine imalatı için hangi teşvikler var?",
    )
    values.update(fields)
    return QuestionSubmit(**values)


def make_service(session, mailer) -> QnaService:
    return QnaService(
        QuestionRepository(session),
        QnaAdminEmailRepository(session),
        QuestionNotifier(EmailLogRepository(session), mailer),
    )


async def add_admins(session, *emails, inactive=()):
    repo = QnaAdminEmailRepository(session)
    for email in emails:
        await repo.create(QnaAdminEmail(email=email, full_name=email.split("@")[0], is_active=email not in inactive))


def test_render_new_question_escapes_html():
    question = Question(
        full_name="<b>Ali</b>",
        email="ali@example.com",
        province="İzmir",
        question="Satır 1\nSatır 2",
        created_at=datetime(2025, 5, 2, 9, 30, tzinfo=timezone.utc),
    )
    html = render_new_question(question)
    assert "&lt;b&gt;Ali&lt;/b&gt;" in html
    assert "Satır 1<br>Satır 2" in html
    assert "Belirtilmemiş" in html
    assert "02.05.2025 09:30" in html


def test_render_answer():
    question = Question(full_name="Ali", email="a@example.com", province="İzmir", question="S?", answer="C.")
    html = render_answer(question)
    assert "Merhaba Ali" in html
    assert "<h3>Yanıt:</h3><p>C.</p>" in html


class TestSubmit:
    async def test_stores_and_notifies_active_admins(self, session):
        await add_admins(session, "yonetici@example.com", "pasif@example.com", inactive={"pasif@example.com"})
        mailer = FakeMailer()

        question = await make_service(session, mailer).submit(submission())

        assert question.id is not None
        assert question.status == QuestionStatus.UNANSWERED
        assert [(to, subject) for to, subject, _ in mailer.sent] == [
            ("yonetici@example.com", "Yeni Soru: Konya - Ayşe Yılmaz")
        ]
        logs = await QuestionRepository(session).email_logs(question.id)
        assert [(log.recipient, log.status) for log in logs] == [("yonetici@example.com", EmailStatus.SENT)]

    async def test_failed_delivery_keeps_question(self, session):
        await add_admins(session, "a@example.com", "b@example.com")

        question = await make_service(session, FakeMailer(failing={"a@example.com"})).submit(submission())

        logs = {log.recipient: log.status for log in await QuestionRepository(session).email_logs(question.id)}
        assert logs == {"a@example.com": EmailStatus.FAILED, "b@example.com": EmailStatus.SENT}
        assert await QuestionRepository(session).get_by_id(question.id) is not None

    async def test_unconfigured_mailer_keeps_question(self, session):
        await add_admins(session, "a@example.com")
        mailer = FakeMailer(error=ConfigurationError("Resend API key is not configured"))

        question = await make_service(session, mailer).submit(submission())

        assert len(await QuestionRepository(session).list()) == 1
        assert await QuestionRepository(session).email_logs(question.id) == []

    async def test_without_admins_nothing_is_sent(self, session):
        mailer = FakeMailer()
        await make_service(session, mailer).submit(submission())
        assert mailer.sent == []


class TestAnswer:
    async def test_answer_is_stored_and_mailed(self, session):
        mailer = FakeMailer()
        service = make_service(session, mailer)
        question = await service.submit(submission())

        answered = await service.answer(
            question.id, QuestionAnswer(answer="  Bölgesel teşvikler uygulanır.  "), ADMIN_ID
        )

        assert answered.answer == "Bölgesel teşvikler uygulanır."
        assert answered.status == QuestionStatus.ANSWERED
        assert answered.answered_by == ADMIN_ID
        assert answered.answered_at is not None
        assert answered.sent_to_user is True
        assert [(to, subject) for to, subject, _ in mailer.sent] == [
            ("ayse@example.com", "Sorunuza Yanıt Geldi - Teşvik Portal")
        ]

    async def test_returned_answer_is_not_mailed(self, session):
        mailer = FakeMailer()
        service = make_service(session, mailer)
        question = await service.submit(submission())

        payload = QuestionAnswer(answer="Taslak", status=QuestionStatus.RETURNED, admin_notes="Kaynak ekle")

        answered = await service.answer(question.id, payload, ADMIN_ID)

        assert answered.status == QuestionStatus.RETURNED
        assert answered.admin_notes == "Kaynak ekle"
        assert answered.sent_to_user is False
        assert mailer.sent == []

    async def test_failed_answer_delivery_is_logged(self, session):
        service = make_service(session, FakeMailer(failing={"ayse@example.com"}))
        question = await service.submit(submission())

        answered = await service.answer(question.id, QuestionAnswer(answer="Yanıt"), ADMIN_ID)

        assert answered.sent_to_user is False
        logs = await QuestionRepository(session).email_logs(question.id)
        assert [(log.recipient, log.status) for log in logs] == [("ayse@example.com", EmailStatus.FAILED)]

    async def test_cannot_answer_as_unanswered(self, session):
        service = make_service(session, FakeMailer())
        question = await service.submit(submission())
        with pytest.raises(ValidationFailedError):
            await service.answer(question.id, QuestionAnswer(answer="x", status=QuestionStatus.UNANSWERED), ADMIN_ID)

    async def test_unknown_question(self, session):
        with pytest.raises(NotFoundError):
            await make_service(session, FakeMailer()).answer(404, QuestionAnswer(answer="x"), ADMIN_ID)

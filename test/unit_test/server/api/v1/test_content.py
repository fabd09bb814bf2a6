"""Unit tests for the announcement, newsletter and legal document endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tesvik_portal.clients.errors import EmailDeliveryError
from tesvik_portal.core.database.entities.content import EmailLog
from tesvik_portal.server.main import app
from tesvik_portal.server.services.deps import get_mailer

pytestmark = pytest.mark.asyncio


class FakeMailer:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.sent = []

    async def send(self, to, subject, html):
        if to in self.failing:
            raise EmailDeliveryError("E-mail delivery failed: 422", upstream_status=422)
        self.sent.append(to)
        return "msg"


def announcement_payload(**fields) -> dict:
    payload = {
        "institution_name": "KOSGEB",
        "title": "Yeni Destek Çağrısı",
        "detail": "Başvurular açıldı.",
        "announcement_date": "2025-04-01",
    }
    payload.update(fields)
    return payload


class TestAnnouncements:
    async def test_public_list_hides_inactive(self, client: AsyncClient, admin_user, admin_headers):
        for payload in [
            announcement_payload(title="Eski", announcement_date="2025-01-01"),
            announcement_payload(title="Yeni", announcement_date="2025-06-01"),
            announcement_payload(title="Pasif", is_active=False),
        ]:
            assert (await client.post("/api/v1/announcements", json=payload, headers=admin_headers)).status_code == 201

        public = (await client.get("/api/v1/announcements")).json()
        assert [a["title"] for a in public] == ["Yeni", "Eski"]
        assert [a["title"] for a in (await client.get("/api/v1/announcements", params={"limit": 1})).json()] == ["Yeni"]

        everything = (await client.get("/api/v1/announcements/all", headers=admin_headers)).json()
        assert len(everything) == 3
        assert (await client.get("/api/v1/announcements/all")).status_code == 401

    async def test_update_and_delete(self, client: AsyncClient, admin_user, admin_headers):
        created = (await client.post("/api/v1/announcements", json=announcement_payload(), headers=admin_headers)).json()

        response = await client.patch(
            f"/api/v1/announcements/{created['id']}", json={"is_active": False}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert response.json()["title"] == "Yeni Destek Çağrısı"

        assert (await client.delete(f"/api/v1/announcements/{created['id']}", headers=admin_headers)).status_code == 204
        response = await client.patch(
            f"/api/v1/announcements/{created['id']}", json={"is_active": True}, headers=admin_headers
        )
        assert response.status_code == 404

    async def test_notify_subscribers(self, client: AsyncClient, admin_user, admin_headers):
        mailer = FakeMailer(failing={"b@example.com"})
        app.dependency_overrides[get_mailer] = lambda: mailer
        created = (await client.post("/api/v1/announcements", json=announcement_payload(), headers=admin_headers)).json()
        for email in ["a@example.com", "b@example.com", "c@example.com"]:
            await client.post("/api/v1/newsletter/subscribe", json={"email": email})
        await client.post("/api/v1/newsletter/unsubscribe", json={"email": "c@example.com"})

        response = await client.post(f"/api/v1/announcements/{created['id']}/notify", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"announcement_id": created["id"], "recipients": 2, "sent": 1, "failed": 1}
        assert mailer.sent == ["a@example.com"]

        response = await client.post("/api/v1/announcements/999/notify", headers=admin_headers)
        assert response.status_code == 404

    async def test_delete_keeps_email_logs(self, client: AsyncClient, session: AsyncSession, admin_user, admin_headers):
        app.dependency_overrides[get_mailer] = lambda: FakeMailer()
        created = (await client.post("/api/v1/announcements", json=announcement_payload(), headers=admin_headers)).json()
        await client.post("/api/v1/newsletter/subscribe", json={"email": "a@example.com"})
        await client.post(f"/api/v1/announcements/{created['id']}/notify", headers=admin_headers)

        response = await client.delete(f"/api/v1/announcements/{created['id']}", headers=admin_headers)

        assert response.status_code == 204
        logs = (await session.execute(select(EmailLog.recipient, EmailLog.announcement_id))).all()
        assert [tuple(row) for row in logs] == [("a@example.com", None)]


class TestNewsletter:
    async def test_subscribe_is_idempotent(self, client: AsyncClient):
        first = (await client.post("/api/v1/newsletter/subscribe", json={"email": "Ali@Example.com"})).json()
        assert first["email"] == "ali@example.com"
        assert first["is_active"] is True

        assert (await client.post("/api/v1/newsletter/unsubscribe", json={"email": "ali@example.com"})).json() == {
            "unsubscribed": True
        }
        assert (await client.post("/api/v1/newsletter/unsubscribe", json={"email": "ali@example.com"})).json() == {
            "unsubscribed": False
        }

        again = (await client.post("/api/v1/newsletter/subscribe", json={"email": "ali@example.com"})).json()
        assert again["id"] == first["id"]
        assert again["is_active"] is True

    async def test_invalid_email(self, client: AsyncClient):
        response = await client.post("/api/v1/newsletter/subscribe", json={"email": "not-an-address"})
        assert response.status_code == 422


class TestLegalDocuments:
    async def test_public_search_and_status(self, client: AsyncClient, admin_user, admin_headers):
        law = (
            await client.post(
                "/api/v1/legal-documents",
                json={"title": "Yatırımlarda Devlet Yardımları", "document_type": "karar", "document_number": "2012/3305"},
                headers=admin_headers,
            )
        ).json()
        await client.post(
            "/api/v1/legal-documents",
            json={"title": "KDV Kanunu", "document_type": "kanun", "keywords": "vergi, istisna"},
            headers=admin_headers,
        )

        found = (await client.get("/api/v1/legal-documents", params={"keyword": "3305"})).json()
        assert [d["title"] for d in found] == ["Yatırımlarda Devlet Yardımları"]
        found = (await client.get("/api/v1/legal-documents", params={"document_type": "kanun"})).json()
        assert [d["title"] for d in found] == ["KDV Kanunu"]

        response = await client.patch(
            f"/api/v1/legal-documents/{law['id']}/status", json={"status": "inactive"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert (await client.get(f"/api/v1/legal-documents/{law['id']}")).status_code == 404
        assert len((await client.get("/api/v1/legal-documents")).json()) == 1
        assert len((await client.get("/api/v1/legal-documents/all", headers=admin_headers)).json()) == 2

    async def test_update_and_delete(self, client: AsyncClient, admin_user, admin_headers):
        document = (
            await client.post(
                "/api/v1/legal-documents", json={"title": "Yönetmelik", "document_type": "yonetmelik"}, headers=admin_headers
            )
        ).json()
        response = await client.patch(
            f"/api/v1/legal-documents/{document['id']}", json={"ministry": "Sanayi ve Teknoloji Bakanlığı"}, headers=admin_headers
        )
        assert response.json()["ministry"] == "Sanayi ve Teknoloji Bakanlığı"
        assert (await client.get(f"/api/v1/legal-documents/{document['id']}")).status_code == 200

        assert (await client.delete(f"/api/v1/legal-documents/{document['id']}", headers=admin_headers)).status_code == 204
        assert (await client.delete(f"/api/v1/legal-documents/{document['id']}", headers=admin_headers)).status_code == 404

    async def test_changes_require_admin(self, client: AsyncClient, user_headers):
        response = await client.post(
            "/api/v1/legal-documents", json={"title": "X", "document_type": "kanun"}, headers=user_headers
        )
        assert response.status_code == 403

"""Unit tests for the investor glossary endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database.entities.glossary import GlossaryTerm

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def terms(session: AsyncSession) -> list:
    rows = [
        GlossaryTerm(term="İhracat", definition="Yurt dışına mal veya hizmet satışı."),
        GlossaryTerm(term="Ithalat", definition="Yurt dışından mal alımı."),
        GlossaryTerm(term="KDV İstisnası", definition="Yatırım malı alımlarında KDV uygulanmaması."),
        GlossaryTerm(term="Faiz Desteği", definition="Yatırım kredisinin faizinin bir kısmının karşılanması."),
    ]
    session.add_all(rows)
    await session.commit()
    return rows


class TestGlossary:
    async def test_list_is_alphabetical_and_paged(self, client: AsyncClient, terms):
        data = (await client.get("/api/v1/glossary", params={"limit": 2})).json()
        assert data["total"] == 4
        assert [t["term"] for t in data["items"]] == ["Faiz Desteği", "Ithalat"]

        data = (await client.get("/api/v1/glossary", params={"limit": 2, "offset": 2})).json()
        assert len(data["items"]) == 2

    async def test_keyword_search(self, client: AsyncClient, terms):
        data = (await client.get("/api/v1/glossary", params={"q": "Yurt"})).json()
        assert {t["term"] for t in data["items"]} == {"İhracat", "Ithalat"}
        assert data["total"] == 2

    async def test_letter_uses_turkish_case(self, client: AsyncClient, terms):
        data = (await client.get("/api/v1/glossary", params={"letter": "i"})).json()
        assert [t["term"] for t in data["items"]] == ["İhracat"]

        data = (await client.get("/api/v1/glossary", params={"letter": "ı"})).json()
        assert [t["term"] for t in data["items"]] == ["Ithalat"]

    async def test_get(self, client: AsyncClient, terms):
        response = await client.get(f"/api/v1/glossary/{terms[0].id}")
        assert response.json()["term"] == "İhracat"
        assert (await client.get("/api/v1/glossary/999")).status_code == 404

    async def test_admin_crud(self, client: AsyncClient, admin_user, admin_headers):
        response = await client.post(
            "/api/v1/glossary",
            json={"term": " Teşvik Belgesi ", "definition": "Destek belgesi."},
            headers=admin_headers,
        )
        assert response.status_code == 201
        created = response.json()
        assert created["term"] == "Teşvik Belgesi"

        duplicate = await client.post(
            "/api/v1/glossary", json={"term": "Teşvik Belgesi", "definition": "Tekrar"}, headers=admin_headers
        )
        assert duplicate.status_code == 400
        assert duplicate.json()["details"] == {"term": "Teşvik Belgesi"}

        response = await client.patch(
            f"/api/v1/glossary/{created['id']}",
            json={"definition": "Yatırım teşvik belgesi."},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["definition"] == "Yatırım teşvik belgesi."
        assert response.json()["term"] == "Teşvik Belgesi"

        assert (await client.delete(f"/api/v1/glossary/{created['id']}", headers=admin_headers)).status_code == 204
        assert (await client.delete(f"/api/v1/glossary/{created['id']}", headers=admin_headers)).status_code == 404

    async def test_rename_to_existing_term(self, client: AsyncClient, terms, admin_user, admin_headers):
        response = await client.patch(
            f"/api/v1/glossary/{terms[0].id}", json={"term": "Ithalat"}, headers=admin_headers
        )
        assert response.status_code == 400

    async def test_changes_require_admin(self, client: AsyncClient, user_headers):
        response = await client.post("/api/v1/glossary", json={"term": "A", "definition": "B"}, headers=user_headers)
        assert response.status_code == 403
        assert (await client.post("/api/v1/glossary", json={"term": "A", "definition": "B"})).status_code == 401

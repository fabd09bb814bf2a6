"""Unit tests for the exchange-rate and geolocation endpoints."""

import httpx
import pytest
from httpx import AsyncClient

from tesvik_portal.clients.geolocation import Location
from tesvik_portal.clients.tcmb import TcmbExchangeClient
from tesvik_portal.server.main import app
from tesvik_portal.server.services.deps import get_exchange_client, get_geolocation_client

pytestmark = pytest.mark.asyncio

XML = """<Tarih_Date Date="01/02/2025">
  <Currency CurrencyCode="USD"><ForexBuying>35.10</ForexBuying><ForexSelling>35.20</ForexSelling></Currency>
  <Currency CurrencyCode="EUR"><ForexBuying>36.10</ForexBuying><ForexSelling>36.20</ForexSelling></Currency>
  <Currency CurrencyCode="GBP"><ForexBuying>43.10</ForexBuying><ForexSelling>43.30</ForexSelling></Currency>
</Tarih_Date>"""


def use_tcmb(handler) -> None:
    client = TcmbExchangeClient(
        "http://mock-tcmb/today.xml", client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    app.dependency_overrides[get_exchange_client] = lambda: client


class FakeGeolocation:
    def __init__(self):
        self.ips = []

    async def lookup(self, ip):
        self.ips.append(ip)
        return Location(city="Ankara", region="Ankara")


class TestExchangeRates:
    async def test_no_rates_yet(self, client: AsyncClient):
        use_tcmb(lambda request: httpx.Response(200, text=XML))
        assert (await client.get("/api/v1/exchange-rates/latest")).status_code == 404

    async def test_refresh_then_latest(self, client: AsyncClient, admin_user, admin_headers):
        use_tcmb(lambda request: httpx.Response(200, text=XML))

        response = await client.post("/api/v1/exchange-rates/refresh", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["rate_date"] == "2025-01-02"

        latest = (await client.get("/api/v1/exchange-rates/latest")).json()
        assert (latest["usd_selling"], latest["eur_buying"], latest["gbp_selling"]) == (35.2, 36.1, 43.3)

    async def test_feed_failure(self, client: AsyncClient, admin_user, admin_headers):
        use_tcmb(lambda request: httpx.Response(503))
        response = await client.post("/api/v1/exchange-rates/refresh", headers=admin_headers)
        assert response.status_code == 502

    async def test_refresh_requires_admin(self, client: AsyncClient, user_headers):
        use_tcmb(lambda request: httpx.Response(200, text=XML))
        assert (await client.post("/api/v1/exchange-rates/refresh", headers=user_headers)).status_code == 403


class TestGeolocation:
    @pytest.fixture
    def geolocation(self):
        fake = FakeGeolocation()
        app.dependency_overrides[get_geolocation_client] = lambda: fake
        return fake

    async def test_explicit_ip(self, client: AsyncClient, geolocation):
        response = await client.get("/api/v1/geolocation", params={"ip": "85.105.1.1"})
        assert response.status_code == 200
        assert response.json()["city"] == "Ankara"
        assert geolocation.ips == ["85.105.1.1"]

    async def test_forwarded_for_header(self, client: AsyncClient, geolocation):
        await client.get("/api/v1/geolocation", headers={"X-Forwarded-For": "85.105.1.2, 10.0.0.1"})
        await client.get("/api/v1/geolocation", headers={"X-Real-IP": "85.105.1.3"})
        assert geolocation.ips == ["85.105.1.2", "85.105.1.3"]

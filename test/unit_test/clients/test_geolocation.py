from __future__ import annotations

import httpx

from tesvik_portal.clients.geolocation import UNKNOWN, GeolocationClient, fallback_location

MAXMIND_URL = "http://mock-maxmind/geoip/v2.1"
IPGEO_URL = "http://mock-ipgeolocation"

MAXMIND_CITY = {
    "country": {"names": {"en": "Turkey"}},
    "city": {"names": {"en": "Ankara"}},
    "subdivisions": [{"iso_code": "06", "names": {"en": "Ankara"}}],
    "postal": {"code": "06000"},
    "location": {"latitude": 39.9, "longitude": 32.8, "time_zone": "Europe/Istanbul"},
}


def make_client(handler, **kwargs) -> GeolocationClient:
    options = dict(
        maxmind_account_id="123",
        maxmind_license_key="secret",
        maxmind_base_url=MAXMIND_URL,
        ipgeolocation_base_url=IPGEO_URL,
    )
    options.update(kwargs)
    return GeolocationClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)), **options)


async def test_maxmind_city():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=MAXMIND_CITY)

    location = await make_client(handler).lookup("85.105.1.1")

    assert seen["path"] == "/geoip/v2.1/city/85.105.1.1"
    assert seen["auth"].startswith("Basic ")
    assert (location.country, location.city, location.region, location.subdivision) == (
        "Turkey",
        "Ankara",
        "Ankara",
        "06",
    )
    assert location.timezone == "Europe/Istanbul"


async def test_falls_back_to_ipgeolocation_when_city_unknown():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "mock-maxmind":
            return httpx.Response(200, json={"country": {"names": {"en": "Turkey"}}})
        assert request.url.params["apiKey"] == "ipgeo-key"
        return httpx.Response(
            200,
            json={"country_name": "Turkey", "city": "Konya", "state_prov": "Konya", "latitude": "37.87", "longitude": "32.48"},
        )

    location = await make_client(handler, ipgeolocation_api_key="ipgeo-key").lookup("1.2.3.4")
    assert location.city == "Konya"
    assert location.latitude == 37.87


async def test_city_stays_unknown_without_secondary_key():
    location = await make_client(lambda r: httpx.Response(200, json={})).lookup("1.2.3.4")
    assert location.city == UNKNOWN
    assert location.country == "Turkey"


async def test_missing_credentials_use_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    location = await make_client(handler, maxmind_account_id=None).lookup("1.2.3.4")
    assert location == fallback_location()


async def test_upstream_error_uses_fallback():
    location = await make_client(lambda r: httpx.Response(500)).lookup("1.2.3.4")
    assert location == fallback_location()

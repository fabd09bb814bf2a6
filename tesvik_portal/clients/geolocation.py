from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import BaseModel

UNKNOWN = "Unknown"


class Location(BaseModel):
    country: str = "Turkey"
    city: str = UNKNOWN
    region: Optional[str] = UNKNOWN
    subdivision: Optional[str] = None
    postal: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None


def fallback_location() -> Location:
    return Location(country="Turkey", city=UNKNOWN, region=UNKNOWN)


def _name(node: Optional[dict]) -> Optional[str]:
    names = (node or {}).get("names") or {}
    return names.get("en") or names.get("tr")


class GeolocationClient:
    """
    Resolves visitor IPs to a location.

    MaxMind GeoLite is asked first; when it cannot resolve the city and an
    ipgeolocation.io key is configured, that service fills the gaps. Lookups
    never raise: any failure yields the Turkey/Unknown fallback.
    """

    def __init__(
        self,
        *,
        maxmind_account_id: Optional[str] = None,
        maxmind_license_key: Optional[str] = None,
        maxmind_base_url: str = "https://geolite.info/geoip/v2.1",
        ipgeolocation_api_key: Optional[str] = None,
        ipgeolocation_base_url: str = "https://api.ipgeolocation.io",
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.maxmind_account_id = maxmind_account_id
        self.maxmind_license_key = maxmind_license_key
        self.maxmind_base_url = maxmind_base_url.rstrip("/")
        self.ipgeolocation_api_key = ipgeolocation_api_key
        self.ipgeolocation_base_url = ipgeolocation_base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def lookup(self, ip: str) -> Location:
        if not self.maxmind_account_id or not self.maxmind_license_key:
            self._logger.warning("MaxMind credentials not configured, using fallback location")
            return fallback_location()
        try:
            location = await self._maxmind(ip)
        except (httpx.HTTPError, ValueError) as e:
            self._logger.warning("MaxMind lookup failed for %s: %s", ip, e)
            return fallback_location()

        if location.city == UNKNOWN and self.ipgeolocation_api_key:
            try:
                location = await self._ipgeolocation(ip, location)
            except (httpx.HTTPError, ValueError) as e:
                self._logger.warning("ipgeolocation.io lookup failed for %s: %s", ip, e)
        return location

    async def _maxmind(self, ip: str) -> Location:
        self._logger.debug("GeolocationClient: GET %s/city/%s", self.maxmind_base_url, ip)
        r = await self._client.get(
            f"{self.maxmind_base_url}/city/{ip}",
            auth=(self.maxmind_account_id, self.maxmind_license_key),
            headers={"Accept": "application/json"},
        )
        r.raise_for_status()
        data = r.json()
        subdivisions = data.get("subdivisions") or [{}]
        location = data.get("location") or {}
        return Location(
            country=_name(data.get("country")) or "Turkey",
            city=_name(data.get("city")) or UNKNOWN,
            region=_name(subdivisions[0]),
            subdivision=subdivisions[0].get("iso_code"),
            postal=(data.get("postal") or {}).get("code"),
            latitude=location.get("latitude"),
            longitude=location.get("longitude"),
            timezone=location.get("time_zone"),
        )

    async def _ipgeolocation(self, ip: str, current: Location) -> Location:
        self._logger.debug("GeolocationClient: city unknown, trying ipgeolocation.io for %s", ip)
        r = await self._client.get(
            f"{self.ipgeolocation_base_url}/ipgeo",
            params={"apiKey": self.ipgeolocation_api_key, "ip": ip},
        )
        r.raise_for_status()
        data = r.json()
        return Location(
            country=data.get("country_name") or current.country,
            city=data.get("city") or current.city,
            region=data.get("state_prov") or current.region,
            subdivision=current.subdivision,
            postal=data.get("zipcode") or current.postal,
            latitude=float(data["latitude"]) if data.get("latitude") else current.latitude,
            longitude=float(data["longitude"]) if data.get("longitude") else current.longitude,
            timezone=(data.get("time_zone") or {}).get("name") or current.timezone,
        )

"""
API endpoint resolving a visitor's location from the IP address.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, Request

from tesvik_portal.clients.geolocation import Location
from tesvik_portal.server.services.deps import GeolocationDep

router = APIRouter(tags=["geolocation"])


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


@router.get(
    "",
    response_model=Location,
    summary="Locate IP",
    description="Country, city and region of an IP address (the caller's when omitted). Never fails: unresolvable addresses get Turkey/Unknown.",
)
async def locate(
    request: Request,
    client: GeolocationDep,
    ip: Optional[str] = Query(default=None, description="IP address to locate"),
) -> Location:
    address = ip or client_ip(request)
    if not address:
        return Location()
    return await client.lookup(address)

"""
Liveness and version endpoints, mounted without the ``/api/v1`` prefix so
load balancers and deploy checks can reach them at fixed paths.
"""

from fastapi import APIRouter

from tesvik_portal.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Liveness check. Does not touch the database or any third-party API.",
    response_description="Always {'status': 'ok'} while the process serves requests.",
)
async def health_check():
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Service version and the version of the public API schema.",
)
async def version():
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}

"""
API endpoints for user roles.

Admins grant and revoke the admin role. User ids are UUIDs; anything else is
rejected with ``400`` and ``details="invalid_user_id"``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.users import AppRole
from tesvik_portal.core.database.repositories.users import UserRoleRepository
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.models.io import AdminListRead, AdminStatusRead, UserRoleRequest
from tesvik_portal.server.core.security import get_current_user_id, is_admin, require_admin, validate_user_id

logger = get_logger(__name__)

router = APIRouter(tags=["user-roles"])


@router.get(
    "/me",
    response_model=AdminStatusRead,
    summary="Am I Admin",
    description="Whether the caller has the admin role.",
)
async def my_status(
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
) -> AdminStatusRead:
    return AdminStatusRead(user_id=user_id, is_admin=await is_admin(user_id, session))


@router.get(
    "/admins",
    response_model=AdminListRead,
    summary="List Admins",
    description="User ids holding the admin role. Admin only.",
)
async def list_admin_ids(
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> AdminListRead:
    return AdminListRead(user_ids=await UserRoleRepository(session).user_ids_with_role(AppRole.ADMIN))


@router.post(
    "/admins",
    response_model=AdminStatusRead,
    status_code=status.HTTP_201_CREATED,
    summary="Grant Admin",
    description="Give a user the admin role. Granting it twice is harmless. Admin only.",
    responses={400: {"description": "invalid_user_id"}},
)
async def grant_admin(
    payload: UserRoleRequest,
    session: AsyncSession = Depends(get_session),
    admin_id: str = Depends(require_admin),
) -> AdminStatusRead:
    user_id = validate_user_id(payload.user_id)
    if await UserRoleRepository(session).grant(user_id, AppRole.ADMIN):
        logger.info(f"Admin role granted to {user_id} by {admin_id}")
    return AdminStatusRead(user_id=user_id, is_admin=True)


@router.delete(
    "/admins/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke Admin",
    description="Take the admin role away from a user. Admin only.",
    responses={
        400: {"description": "invalid_user_id"},
        404: {"description": "The user is not an admin"},
    },
)
async def revoke_admin(
    user_id: str,
    session: AsyncSession = Depends(get_session),
    admin_id: str = Depends(require_admin),
) -> None:
    user_id = validate_user_id(user_id)
    if not await UserRoleRepository(session).revoke(user_id, AppRole.ADMIN):
        raise NotFoundError(f"User {user_id} does not have the admin role")
    logger.info(f"Admin role revoked from {user_id} by {admin_id}")

"""
Caller identification and admin authorization.

Authentication itself happens in front of this service; the gateway forwards
the authenticated user id in a header (``X-User-Id`` by default). Requests
without the header are anonymous. Anonymous chat sessions are owned by a
client token (``X-Client-Token``) that the service issues with the first
session. Admins are users with the ``admin`` role in ``user_roles`` plus the
bootstrap ids from configuration.
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.users import AppRole
from tesvik_portal.core.database.repositories.users import UserRoleRepository
from tesvik_portal.core.errors import AuthenticationRequiredError, PermissionDeniedError, ValidationFailedError

from .config import settings

INVALID_USER_ID = "invalid_user_id"


def validate_user_id(user_id: str) -> str:
    """Return the canonical form of a UUID user id.

    Raises:
        ValidationFailedError: ``user_id`` is not a UUID (``details`` is ``invalid_user_id``).
    """
    try:
        return str(uuid.UUID(str(user_id).strip()))
    except (ValueError, AttributeError):
        raise ValidationFailedError("Invalid user id", details=INVALID_USER_ID) from None


async def get_current_user_id(request: Request) -> Optional[str]:
    value = request.headers.get(settings.auth.user_id_header)
    return value.strip() if value and value.strip() else None


async def get_client_token(request: Request) -> Optional[str]:
    value = request.headers.get(settings.auth.client_token_header)
    return value.strip() if value and value.strip() else None


def _canonical(user_id: str) -> str:
    try:
        return validate_user_id(user_id)
    except ValidationFailedError:
        return user_id


async def is_admin(user_id: Optional[str], session: AsyncSession) -> bool:
    if not user_id:
        return False
    user_id = _canonical(user_id)
    if user_id in {_canonical(i) for i in settings.auth.bootstrap_admin_ids}:
        return True
    return await UserRoleRepository(session).has_role(user_id, AppRole.ADMIN)


async def require_admin(
    user_id: Optional[str] = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> str:
    """Dependency for admin-only endpoints.

    Raises:
        AuthenticationRequiredError: No user id header (401).
        PermissionDeniedError: The caller is not an admin (403).
    """
    if user_id is None:
        raise AuthenticationRequiredError("Authentication required")
    if not await is_admin(user_id, session):
        raise PermissionDeniedError("Admin role required")
    return user_id

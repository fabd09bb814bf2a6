"""
User role repository.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import AppRole, UserRole
from .base import SQLModelRepository


class UserRoleRepository(SQLModelRepository[UserRole]):
    default_order = (UserRole.created_at,)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserRole)

    async def has_role(self, user_id: str, role: AppRole) -> bool:
        result = await self.session.execute(
            select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role)
        )
        return result.first() is not None

    async def user_ids_with_role(self, role: AppRole) -> List[str]:
        result = await self.session.execute(
            select(UserRole.user_id).where(UserRole.role == role).order_by(UserRole.created_at)
        )
        return [row[0] for row in result.all()]

    async def grant(self, user_id: str, role: AppRole) -> bool:
        """Grant a role; returns False when the user already had it."""
        if await self.has_role(user_id, role):
            return False
        await self.create(UserRole(user_id=user_id, role=role))
        return True

    async def revoke(self, user_id: str, role: AppRole) -> bool:
        result = await self.session.execute(
            delete(UserRole).where(UserRole.user_id == user_id, UserRole.role == role)  # type: ignore
        )
        await self.session.commit()
        return (result.rowcount or 0) > 0

"""
API endpoint listing the stored admin settings. Admin only.

Settings are changed through the endpoints of the feature they belong to
(e.g. ``PUT /incentives/parameters``).
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.repositories.settings import AdminSettingRepository
from tesvik_portal.core.models.io import AdminSettingRead
from tesvik_portal.server.core.security import require_admin

router = APIRouter(tags=["admin-settings"], dependencies=[Depends(require_admin)])


@router.get(
    "",
    response_model=List[AdminSettingRead],
    summary="List Admin Settings",
    description="Retrieve the stored admin settings, optionally for one category.",
)
async def list_settings(
    category: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> List[AdminSettingRead]:
    rows = await AdminSettingRepository(session).list(filters={"category": category})
    return [AdminSettingRead.model_validate(r) for r in rows]

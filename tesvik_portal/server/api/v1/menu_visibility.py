"""
API endpoints for menu visibility.

Admins decide per menu item which audiences (admin, registered, anonymous)
see it. Clients ask for the items visible to the current caller.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.content.menu import (
    MENU_ITEMS,
    MENU_KEYS,
    audience_for,
    filter_visible_menu_items,
    resolve_visibility,
)
from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.repositories.settings import MenuVisibilityRepository
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.models.io import MenuVisibilityRead, MenuVisibilityUpdate, VisibleMenuRead
from tesvik_portal.server.core.security import get_current_user_id, is_admin, require_admin

router = APIRouter(tags=["menu-visibility"])


@router.get(
    "",
    response_model=List[MenuVisibilityRead],
    summary="List Menu Visibility",
    description="Effective visibility of every menu item; items never configured show their defaults. Admin only.",
)
async def list_menu_visibility(
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[MenuVisibilityRead]:
    resolved = resolve_visibility(await MenuVisibilityRepository(session).as_mapping())
    return [MenuVisibilityRead(setting_key=key, **visibility.model_dump()) for key, visibility in resolved.items()]


@router.put(
    "/{setting_key}",
    response_model=MenuVisibilityRead,
    summary="Update Menu Visibility",
    description="Set the audiences that see a menu item. Admin only.",
    responses={404: {"description": "Unknown menu item"}},
)
async def update_menu_visibility(
    setting_key: str,
    payload: MenuVisibilityUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> MenuVisibilityRead:
    if setting_key not in MENU_KEYS:
        raise NotFoundError(f"Unknown menu item {setting_key}")
    repo = MenuVisibilityRepository(session)
    row = await repo.upsert(setting_key, payload.admin, payload.registered, payload.anonymous)
    await session.commit()
    return MenuVisibilityRead.model_validate(row)


@router.get(
    "/visible",
    response_model=VisibleMenuRead,
    summary="Visible Menu Items",
    description="Setting keys of the menu items the caller may see.",
)
async def visible_menu_items(
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
) -> VisibleMenuRead:
    admin = await is_admin(user_id, session)
    authenticated = user_id is not None
    resolved = resolve_visibility(await MenuVisibilityRepository(session).as_mapping())
    items = filter_visible_menu_items(MENU_ITEMS, resolved, authenticated, admin)
    return VisibleMenuRead(
        audience=audience_for(authenticated, admin).value,
        items=[item.setting_key for item in items],
    )

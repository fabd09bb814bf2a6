"""
API endpoints for announcements.

The public list contains active announcements only, ordered by display order
and then newest date first. Admins manage announcements and can e-mail one to
the newsletter subscribers.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.content import Announcement
from tesvik_portal.core.database.repositories.content import AnnouncementRepository
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.models.io import (
    AnnouncementCreate,
    AnnouncementRead,
    AnnouncementUpdate,
    NotificationReport,
)
from tesvik_portal.server.core.security import require_admin
from tesvik_portal.server.services.deps import NotifierDep

router = APIRouter(tags=["announcements"])


@router.get(
    "",
    response_model=List[AnnouncementRead],
    summary="List Announcements",
    description="Retrieve the active announcements.",
)
async def list_announcements(
    limit: Optional[int] = Query(default=None, ge=1),
    session: AsyncSession = Depends(get_session),
) -> List[AnnouncementRead]:
    return [AnnouncementRead.model_validate(a) for a in await AnnouncementRepository(session).list_active(limit)]


@router.get(
    "/all",
    response_model=List[AnnouncementRead],
    summary="List All Announcements",
    description="Retrieve every announcement, including inactive ones. Admin only.",
)
async def list_all_announcements(
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> List[AnnouncementRead]:
    return [AnnouncementRead.model_validate(a) for a in await AnnouncementRepository(session).list()]


@router.post(
    "",
    response_model=AnnouncementRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Announcement",
)
async def create_announcement(
    payload: AnnouncementCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> AnnouncementRead:
    announcement = await AnnouncementRepository(session).create(Announcement(**payload.model_dump()))
    return AnnouncementRead.model_validate(announcement)


@router.patch(
    "/{announcement_id}",
    response_model=AnnouncementRead,
    summary="Update Announcement",
    responses={404: {"description": "Announcement not found"}},
)
async def update_announcement(
    announcement_id: int,
    payload: AnnouncementUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> AnnouncementRead:
    repo = AnnouncementRepository(session)
    announcement = await repo.get_by_id(announcement_id)
    if announcement is None:
        raise NotFoundError(f"Announcement {announcement_id} not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(announcement, key, value)
    return AnnouncementRead.model_validate(await repo.update(announcement))


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Announcement",
    responses={404: {"description": "Announcement not found"}},
)
async def delete_announcement(
    announcement_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    if not await AnnouncementRepository(session).delete(announcement_id):
        raise NotFoundError(f"Announcement {announcement_id} not found")


@router.post(
    "/{announcement_id}/notify",
    response_model=NotificationReport,
    summary="E-mail Announcement",
    description="Send the announcement to every active newsletter subscriber. Admin only.",
    response_description="Number of recipients, successful and failed deliveries.",
    responses={
        404: {"description": "Announcement not found"},
        500: {"description": "E-mail provider is not configured"},
    },
)
async def notify_subscribers(
    announcement_id: int,
    notifier: NotifierDep,
    _admin: str = Depends(require_admin),
) -> NotificationReport:
    return await notifier.notify(announcement_id)

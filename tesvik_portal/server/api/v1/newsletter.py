"""
API endpoints for the newsletter subscription.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.repositories.content import NewsletterRepository
from tesvik_portal.core.models.io import NewsletterRequest, NewsletterSubscriberRead

router = APIRouter(tags=["newsletter"])


@router.post(
    "/subscribe",
    response_model=NewsletterSubscriberRead,
    summary="Subscribe",
    description="Subscribe an e-mail address. Subscribing again is harmless and reactivates an unsubscribed address.",
)
async def subscribe(
    payload: NewsletterRequest,
    session: AsyncSession = Depends(get_session),
) -> NewsletterSubscriberRead:
    return NewsletterSubscriberRead.model_validate(await NewsletterRepository(session).subscribe(payload.email))


@router.post(
    "/unsubscribe",
    summary="Unsubscribe",
    description="Stop sending e-mails to an address.",
    response_description="Whether an active subscription was ended.",
)
async def unsubscribe(
    payload: NewsletterRequest,
    session: AsyncSession = Depends(get_session),
) -> dict:
    return {"unsubscribed": await NewsletterRepository(session).unsubscribe(payload.email)}

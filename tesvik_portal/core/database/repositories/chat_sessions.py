"""
Chat session repository.

This module provides data access operations for chat sessions and their
messages.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tesvik_portal.core.text import utc_now

from ..entities.chat_sessions import ChatMessage, ChatSession, MessageRole
from .base import SQLModelRepository


class ChatSessionRepository(SQLModelRepository[ChatSession]):
    """Repository for chat session data access operations using SQLModel."""

    default_order = (ChatSession.updated_at.desc(), ChatSession.id.desc())  # type: ignore

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ChatSession)

    async def list_for_user(
        self, user_id: Optional[str], client_token: Optional[str] = None, limit: Optional[int] = None
    ) -> List[ChatSession]:
        """Sessions of a signed-in user, or the anonymous sessions of one client token.

        A caller with neither gets no sessions.
        """
        stmt = select(ChatSession)
        if user_id is not None:
            stmt = stmt.where(ChatSession.user_id == user_id)
        elif client_token:
            stmt = stmt.where(ChatSession.user_id.is_(None), ChatSession.client_token == client_token)  # type: ignore
        else:
            return []
        stmt = stmt.order_by(*self.default_order)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_message(self, chat_session: ChatSession, role: MessageRole, content: str) -> ChatMessage:
        """Append a message and bump the session's ``updated_at``."""
        message = ChatMessage(session_id=chat_session.id, role=role, content=content)
        chat_session.updated_at = utc_now()
        self.session.add(message)
        self.session.add(chat_session)
        await self.session.commit()
        await self.session.refresh(message)
        return message

    async def get_messages(self, session_id: int, limit: Optional[int] = None) -> List[ChatMessage]:
        """Messages of a session in chronological order."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.session_id == session_id)
            .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())  # type: ignore
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_message(self, message_id: int) -> Optional[ChatMessage]:
        return await self.session.get(ChatMessage, message_id)

    async def delete_message(self, message_id: int) -> bool:
        message = await self.get_message(message_id)
        if message is None:
            return False
        await self.session.delete(message)
        await self.session.commit()
        return True

    async def delete(self, entity_id: str | int) -> bool:
        chat_session = await self.get_by_id(entity_id)
        if chat_session is None:
            return False
        await self.session.execute(delete(ChatMessage).where(ChatMessage.session_id == chat_session.id))  # type: ignore
        await self.session.delete(chat_session)
        await self.session.commit()
        return True

"""
API endpoints for managing chat sessions and messages.

A session belongs to the user that created it (``X-User-Id``). An anonymous
session belongs to the client token sent in ``X-Client-Token``; when the
request has none, a new token is issued and returned with the session.
Sessions of another owner can't be read or changed.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.chat_sessions import ChatSession, new_client_token
from tesvik_portal.core.database.repositories.chat_sessions import ChatSessionRepository
from tesvik_portal.core.errors import NotFoundError, PermissionDeniedError
from tesvik_portal.core.models.io import (
    ChatHistoryRead,
    ChatMessageRead,
    ChatSessionCreate,
    ChatSessionRead,
    ChatSessionUpdate,
)
from tesvik_portal.server.core.security import get_client_token, get_current_user_id

router = APIRouter(tags=["chat-sessions"])


async def _owned_session(
    repo: ChatSessionRepository, session_id: int, user_id: Optional[str], client_token: Optional[str]
) -> ChatSession:
    chat_session = await repo.get_by_id(session_id)
    if chat_session is None:
        raise NotFoundError(f"Chat session {session_id} not found")
    if not chat_session.owned_by(user_id, client_token):
        raise PermissionDeniedError("Chat session belongs to another user")
    return chat_session


@router.post(
    "",
    response_model=ChatSessionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Chat Session",
    description="Create a new, empty chat session for the caller. Anonymous sessions carry their owner token.",
)
async def create_chat_session(
    payload: ChatSessionCreate,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> ChatSessionRead:
    if user_id is None:
        client_token = client_token or new_client_token()
    else:
        client_token = None
    chat_session = await ChatSessionRepository(session).create(
        ChatSession(user_id=user_id, client_token=client_token, title=payload.title)
    )
    return ChatSessionRead.model_validate(chat_session)


@router.get(
    "",
    response_model=List[ChatSessionRead],
    summary="List Chat Sessions",
    description="Retrieve the caller's chat sessions, most recently active first.",
)
async def list_chat_sessions(
    limit: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> List[ChatSessionRead]:
    sessions = await ChatSessionRepository(session).list_for_user(user_id, client_token, limit=limit)
    return [ChatSessionRead.model_validate(s) for s in sessions]


@router.get(
    "/{session_id}/history",
    response_model=ChatHistoryRead,
    summary="Get Chat History",
    description="Retrieve a chat session with all of its messages in chronological order.",
    responses={
        403: {"description": "Chat session belongs to another user"},
        404: {"description": "Chat session not found"},
    },
)
async def get_chat_history(
    session_id: int,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> ChatHistoryRead:
    repo = ChatSessionRepository(session)
    chat_session = await _owned_session(repo, session_id, user_id, client_token)
    messages = await repo.get_messages(session_id)
    return ChatHistoryRead(
        session=ChatSessionRead.model_validate(chat_session),
        messages=[ChatMessageRead.model_validate(m) for m in messages],
    )


@router.patch(
    "/{session_id}",
    response_model=ChatSessionRead,
    summary="Rename Chat Session",
    responses={
        403: {"description": "Chat session belongs to another user"},
        404: {"description": "Chat session not found"},
    },
)
async def rename_chat_session(
    session_id: int,
    payload: ChatSessionUpdate,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> ChatSessionRead:
    repo = ChatSessionRepository(session)
    chat_session = await _owned_session(repo, session_id, user_id, client_token)
    chat_session.title = payload.title
    return ChatSessionRead.model_validate(await repo.update(chat_session))


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Chat Session",
    description="Delete a chat session together with its messages.",
    responses={
        403: {"description": "Chat session belongs to another user"},
        404: {"description": "Chat session not found"},
    },
)
async def delete_chat_session(
    session_id: int,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> None:
    repo = ChatSessionRepository(session)
    await _owned_session(repo, session_id, user_id, client_token)
    await repo.delete(session_id)


@router.delete(
    "/{session_id}/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Chat Message",
    responses={404: {"description": "Chat session or message not found"}},
)
async def delete_chat_message(
    session_id: int,
    message_id: int,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> None:
    repo = ChatSessionRepository(session)
    await _owned_session(repo, session_id, user_id, client_token)
    message = await repo.get_message(message_id)
    if message is None or message.session_id != session_id:
        raise NotFoundError(f"Message {message_id} not found in chat session {session_id}")
    await repo.delete_message(message_id)

"""
Chat session entity models.

This module contains the database entities for the assistant's conversation
history. A session belongs to a user id or, for anonymous chats, to the
client token handed out when the session was created. It holds an ordered
list of user and assistant messages.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, timestamp_field


def new_client_token() -> str:
    return secrets.token_urlsafe(32)


class MessageRole(str, Enum):
    """Role of message sender in conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatSession(Base, table=True):
    """Persistent chat session.

    Table: chat_sessions
    """

    __tablename__ = "chat_sessions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[str] = Field(default=None, index=True, description="Owner user id")
    client_token: Optional[str] = Field(
        default=None, index=True, max_length=64, description="Owner token of an anonymous session"
    )
    title: str = Field(description="Chat session title")
    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(on_update=True)

    def owned_by(self, user_id: Optional[str], client_token: Optional[str]) -> bool:
        if self.user_id is not None:
            return self.user_id == user_id
        if not self.client_token or not client_token:
            return False
        return secrets.compare_digest(self.client_token, client_token)

    def __repr__(self) -> str:
        return f"ChatSession(id={self.id}, title={self.title})"


class ChatMessage(Base, table=True):
    """Individual message within a chat session.

    Table: chat_messages
    """

    __tablename__ = "chat_messages"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="chat_sessions.id", index=True)
    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")
    created_at: datetime = timestamp_field(index=True)

    def __repr__(self) -> str:
        return f"ChatMessage(id={self.id}, role={self.role}, session_id={self.session_id})"

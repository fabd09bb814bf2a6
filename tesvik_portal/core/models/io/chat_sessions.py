"""
Chat session I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the assistant chat, its
sessions and messages.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tesvik_portal.core.database.entities.chat_sessions import MessageRole


class ChatSessionRead(BaseModel):
    """Schema for reading chat session from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[str] = Field(default=None, description="Owner user id")
    client_token: Optional[str] = Field(default=None, description="Owner token of an anonymous session")
    title: str = Field(description="Chat session title")
    created_at: datetime
    updated_at: datetime


class ChatSessionCreate(BaseModel):
    title: str = Field(default="Yeni sohbet", min_length=1, description="Chat session title")


class ChatSessionUpdate(BaseModel):
    title: str = Field(min_length=1)


class ChatMessageRead(BaseModel):
    """Schema for reading chat message from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: int = Field(description="Chat session ID")
    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")
    created_at: datetime


class ChatHistoryRead(BaseModel):
    """Schema for reading full chat history."""

    session: ChatSessionRead
    messages: List[ChatMessageRead]


class ChatRequest(BaseModel):
    question: Any = Field(default=None, description="The user's question; anything but non-empty text is rejected")
    session_id: Optional[int] = Field(default=None, description="Existing chat session to continue")


class ChatSourceRead(BaseModel):
    filename: str
    similarity: float


class ChatResponse(BaseModel):
    answer: str
    follow_up_question: Optional[str] = None
    sources: List[ChatSourceRead] = Field(default_factory=list)
    session_id: Optional[int] = None
    client_token: Optional[str] = Field(default=None, description="Owner token of the anonymous session")

"""
API endpoint for the knowledge-base chat assistant.

Questions are answered from the ingested knowledge documents (retrieval
augmented generation). Each exchange is stored in a chat session; a new
session is created when the request does not name one; an anonymous caller
gets the owner token of that session back and sends it as ``X-Client-Token``
to continue it.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from tesvik_portal.core.models.io import ChatRequest, ChatResponse, ChatSourceRead
from tesvik_portal.server.core.security import get_client_token, get_current_user_id
from tesvik_portal.server.services.deps import ChatServiceDep

router = APIRouter(tags=["chat"])


@router.post(
    "",
    response_model=ChatResponse,
    summary="Ask the Assistant",
    description="Answer a question from the knowledge base and store the exchange in a chat session.",
    response_description="The answer, an optional follow-up question, the sources used and the session id.",
    responses={
        200: {"description": "Answer generated"},
        400: {"description": "Empty or invalid question"},
        403: {"description": "The chat session belongs to another owner"},
        404: {"description": "Chat session not found"},
        429: {"description": "The language model is rate limited"},
        503: {"description": "The language model is unavailable"},
    },
)
async def ask(
    payload: ChatRequest,
    service: ChatServiceDep,
    user_id: Optional[str] = Depends(get_current_user_id),
    client_token: Optional[str] = Depends(get_client_token),
) -> ChatResponse:
    answer = await service.ask(
        payload.question, session_id=payload.session_id, user_id=user_id, client_token=client_token
    )
    return ChatResponse(
        answer=answer.answer,
        follow_up_question=answer.follow_up_question,
        sources=[ChatSourceRead(filename=s.filename, similarity=s.similarity) for s in answer.sources],
        session_id=answer.session_id,
        client_token=answer.client_token,
    )

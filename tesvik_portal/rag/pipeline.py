"""RAG chat pipeline.

``RagChatService.ask`` answers a question from the knowledge base:

1. embed the question and retrieve the most similar chunks
2. without matches, answer with the fixed "no information" text
3. otherwise build the context (top chunks plus the questions they answer)
   and let the answer generator write the reply
4. post-process the reply (badge, follow-up question) and store both turns
   in the chat session
"""

from __future__ import annotations

import re
import time
from typing import List, Optional

from pydantic import BaseModel

from tesvik_portal.clients.answer_generator import AnswerGenerator
from tesvik_portal.clients.openai_embeddings import Embedder
from tesvik_portal.core.database.entities.chat_sessions import ChatSession, MessageRole, new_client_token
from tesvik_portal.core.database.repositories.chat_sessions import ChatSessionRepository
from tesvik_portal.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.monitoring import log_chat_answer
from tesvik_portal.server.core.config import RAGConfig

from .knowledge_base import DocumentMatch, KnowledgeBaseService
from .postprocess import apply_badge, extract_follow_up_question
from .prompts import NO_INFORMATION_ANSWER, build_user_prompt

logger = get_logger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"
TITLE_LENGTH = 50
INVALID_QUESTION_MESSAGE = "Geçerli bir soru girin"

_QUESTION_RE = re.compile(r"Soru:\s*(.+?)(?=Cevap:|$)", re.IGNORECASE | re.DOTALL)


class ChatSource(BaseModel):
    filename: str
    similarity: float


class ChatAnswer(BaseModel):
    answer: str
    follow_up_question: Optional[str] = None
    sources: List[ChatSource] = []
    session_id: Optional[int] = None
    client_token: Optional[str] = None


def extract_matched_questions(matches: List[DocumentMatch], limit: int = 3) -> List[str]:
    """Questions of the ``Soru: ... Cevap: ...`` chunks, in match order."""
    questions = []
    for match in matches:
        if "Soru:" not in match.content:
            continue
        found = _QUESTION_RE.search(match.content)
        if found and found.group(1).strip():
            questions.append(found.group(1).strip())
    return questions[:limit]


def build_context(matches: List[DocumentMatch], size: int = 5) -> str:
    return CONTEXT_SEPARATOR.join(m.content for m in matches[:size])


def session_title(question: str) -> str:
    question = question.strip()
    if len(question) <= TITLE_LENGTH:
        return question
    return question[:TITLE_LENGTH] + "..."


class RagChatService:
    def __init__(
        self,
        knowledge_base: KnowledgeBaseService,
        embedder: Embedder,
        generator: AnswerGenerator,
        sessions: Optional[ChatSessionRepository] = None,
        config: Optional[RAGConfig] = None,
    ) -> None:
        self.knowledge_base = knowledge_base
        self.embedder = embedder
        self.generator = generator
        self.sessions = sessions
        self.config = config or RAGConfig()

    async def ask(
        self,
        question: object,
        session_id: Optional[int] = None,
        user_id: Optional[str] = None,
        client_token: Optional[str] = None,
    ) -> ChatAnswer:
        """Answer ``question`` and persist the exchange when a session store is set.

        A new anonymous session is owned by ``client_token``, or by a freshly
        issued token that is returned in the answer.

        Raises:
            ValidationFailedError: The question is empty or not a string.
            NotFoundError: ``session_id`` does not exist.
            PermissionDeniedError: The session belongs to another owner.
        """
        if not isinstance(question, str) or not question.strip():
            raise ValidationFailedError(INVALID_QUESTION_MESSAGE)
        question = question.strip()
        started = time.perf_counter()

        chat_session = await self._existing_session(session_id, user_id, client_token)

        query_embedding = await self.embedder.embed(question)
        matches = await self.knowledge_base.match_documents(
            query_embedding, self.config.match_threshold, self.config.match_count
        )
        logger.info(f"Found {len(matches)} similar knowledge chunks")

        if not matches:
            answer = ChatAnswer(answer=NO_INFORMATION_ANSWER, sources=[])
        else:
            matched_questions = extract_matched_questions(matches, self.config.matched_question_count)
            context = build_context(matches, self.config.context_size)
            raw = await self.generator.generate(build_user_prompt(context, question, matched_questions))
            body, follow_up = extract_follow_up_question(apply_badge(raw))
            answer = ChatAnswer(
                answer=body,
                follow_up_question=follow_up,
                sources=[
                    ChatSource(filename=m.filename, similarity=m.similarity)
                    for m in matches[: self.config.context_size]
                ],
            )

        if self.sessions is not None:
            if chat_session is None:
                chat_session = await self.sessions.create(
                    ChatSession(
                        user_id=user_id,
                        client_token=None if user_id else (client_token or new_client_token()),
                        title=session_title(question),
                    )
                )
            await self.sessions.add_message(chat_session, MessageRole.USER, question)
            stored = answer.answer if not answer.follow_up_question else f"{answer.answer}\n\n{answer.follow_up_question}"
            await self.sessions.add_message(chat_session, MessageRole.ASSISTANT, stored)
            answer.session_id = chat_session.id
            answer.client_token = chat_session.client_token

        log_chat_answer(
            str(answer.session_id) if answer.session_id else None,
            len(answer.sources),
            (time.perf_counter() - started) * 1000,
        )
        return answer

    async def _existing_session(
        self, session_id: Optional[int], user_id: Optional[str], client_token: Optional[str]
    ) -> Optional[ChatSession]:
        if self.sessions is None or session_id is None:
            return None
        chat_session = await self.sessions.get_by_id(session_id)
        if chat_session is None:
            raise NotFoundError(f"Chat session {session_id} not found")
        if not chat_session.owned_by(user_id, client_token):
            raise PermissionDeniedError("Chat session belongs to another user")
        return chat_session

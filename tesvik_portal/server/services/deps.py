"""
Service Dependencies.

Builds the third-party clients from settings once per process and the
request-scoped domain services on top of the request's database session.
Tests replace any of them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.clients.answer_generator import AnswerGenerator
from tesvik_portal.clients.geolocation import GeolocationClient
from tesvik_portal.clients.mailer import ResendEmailClient
from tesvik_portal.clients.openai_embeddings import Embedder, OpenAIEmbeddingClient
from tesvik_portal.clients.tcmb import TcmbExchangeClient
from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.repositories.analytics import SearchAnalyticsRepository
from tesvik_portal.core.database.repositories.chat_sessions import ChatSessionRepository
from tesvik_portal.core.database.repositories.content import (
    AnnouncementRepository,
    EmailLogRepository,
    NewsletterRepository,
)
from tesvik_portal.core.database.repositories.exchange_rates import ExchangeRateRepository
from tesvik_portal.core.database.repositories.knowledge import KnowledgeChunkRepository
from tesvik_portal.core.database.repositories.qna import QnaAdminEmailRepository, QuestionRepository
from tesvik_portal.core.database.repositories.support_programs import SupportProgramRepository
from tesvik_portal.rag.knowledge_base import KnowledgeBaseService
from tesvik_portal.rag.pipeline import RagChatService
from tesvik_portal.rag.prompts import SYSTEM_PROMPT
from tesvik_portal.search.embeddings import ProgramEmbeddingService
from tesvik_portal.search.hybrid import HybridSearchService
from tesvik_portal.server.core.config import settings

from .exchange_rates import ExchangeRateService
from .notifications import AnnouncementNotifier, QuestionNotifier
from .qna import QnaService


def _secret(value) -> str | None:
    return value.get_secret_value() if value is not None else None


@lru_cache
def get_embedder() -> Embedder:
    openai = settings.ai_provider.openai
    return OpenAIEmbeddingClient(
        openai.base_url,
        api_key=_secret(openai.api_key),
        model=openai.embedding_model,
        dimensions=openai.embedding_dimensions,
        timeout=openai.timeout,
    )


@lru_cache
def get_answer_generator() -> AnswerGenerator:
    chat = settings.ai_provider.chat
    return AnswerGenerator(chat.model, system_prompt=SYSTEM_PROMPT, temperature=chat.temperature)


@lru_cache
def get_geolocation_client() -> GeolocationClient:
    geo = settings.geolocation
    return GeolocationClient(
        maxmind_account_id=geo.maxmind_account_id,
        maxmind_license_key=_secret(geo.maxmind_license_key),
        maxmind_base_url=geo.maxmind_base_url,
        ipgeolocation_api_key=_secret(geo.ipgeolocation_api_key),
        ipgeolocation_base_url=geo.ipgeolocation_base_url,
        timeout=geo.timeout,
    )


@lru_cache
def get_mailer() -> ResendEmailClient:
    email = settings.email
    return ResendEmailClient(
        email.base_url, api_key=_secret(email.resend_api_key), sender=email.sender, timeout=email.timeout
    )


@lru_cache
def get_exchange_client() -> TcmbExchangeClient:
    return TcmbExchangeClient(settings.exchange.tcmb_url, timeout=settings.exchange.timeout)


def get_search_service(
    session: AsyncSession = Depends(get_session),
    embedder: Embedder = Depends(get_embedder),
) -> HybridSearchService:
    return HybridSearchService(
        SupportProgramRepository(session),
        SearchAnalyticsRepository(session),
        embedder,
        semantic_threshold=settings.search.semantic_threshold,
        max_limit=settings.search.max_limit,
    )


def get_program_embedding_service(
    session: AsyncSession = Depends(get_session),
    embedder: Embedder = Depends(get_embedder),
) -> ProgramEmbeddingService:
    return ProgramEmbeddingService(SupportProgramRepository(session), embedder)


def get_knowledge_base(
    session: AsyncSession = Depends(get_session),
    embedder: Embedder = Depends(get_embedder),
) -> KnowledgeBaseService:
    return KnowledgeBaseService(KnowledgeChunkRepository(session), embedder, chunk_size=settings.rag.chunk_size)


def get_chat_service(
    session: AsyncSession = Depends(get_session),
    knowledge_base: KnowledgeBaseService = Depends(get_knowledge_base),
    embedder: Embedder = Depends(get_embedder),
    generator: AnswerGenerator = Depends(get_answer_generator),
) -> RagChatService:
    return RagChatService(
        knowledge_base, embedder, generator, sessions=ChatSessionRepository(session), config=settings.rag
    )


def get_exchange_rate_service(
    session: AsyncSession = Depends(get_session),
    client: TcmbExchangeClient = Depends(get_exchange_client),
) -> ExchangeRateService:
    return ExchangeRateService(ExchangeRateRepository(session), client)


def get_notifier(
    session: AsyncSession = Depends(get_session),
    mailer: ResendEmailClient = Depends(get_mailer),
) -> AnnouncementNotifier:
    return AnnouncementNotifier(
        AnnouncementRepository(session), NewsletterRepository(session), EmailLogRepository(session), mailer
    )



def get_qna_service(
    session: AsyncSession = Depends(get_session),
    mailer: ResendEmailClient = Depends(get_mailer),
) -> QnaService:
    return QnaService(
        QuestionRepository(session),
        QnaAdminEmailRepository(session),
        QuestionNotifier(EmailLogRepository(session), mailer),
    )


SearchServiceDep = Annotated[HybridSearchService, Depends(get_search_service)]
ProgramEmbeddingServiceDep = Annotated[ProgramEmbeddingService, Depends(get_program_embedding_service)]
KnowledgeBaseDep = Annotated[KnowledgeBaseService, Depends(get_knowledge_base)]
ChatServiceDep = Annotated[RagChatService, Depends(get_chat_service)]
ExchangeRateServiceDep = Annotated[ExchangeRateService, Depends(get_exchange_rate_service)]
NotifierDep = Annotated[AnnouncementNotifier, Depends(get_notifier)]
QnaServiceDep = Annotated[QnaService, Depends(get_qna_service)]
GeolocationDep = Annotated[GeolocationClient, Depends(get_geolocation_client)]

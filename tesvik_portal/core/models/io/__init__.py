"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- support_programs: programs, institutions, tags, files and search results
- content: announcements, legal documents and the newsletter
- settings: admin settings, menu visibility, regions and user roles
- chat_sessions: assistant chat, sessions and messages
- knowledge: knowledge documents and exchange rates
- qna: Soru-Sor questions, admin notification addresses and the glossary
"""

from .chat_sessions import (
    ChatHistoryRead,
    ChatMessageRead,
    ChatRequest,
    ChatResponse,
    ChatSessionCreate,
    ChatSessionRead,
    ChatSessionUpdate,
    ChatSourceRead,
)
from .content import (
    AnnouncementCreate,
    AnnouncementRead,
    AnnouncementUpdate,
    LegalDocumentCreate,
    LegalDocumentRead,
    LegalDocumentStatusUpdate,
    LegalDocumentUpdate,
    NewsletterRequest,
    NewsletterSubscriberRead,
    NotificationReport,
)
from .knowledge import ExchangeRateRead, KnowledgeDocumentCreate
from .qna import (
    GlossaryPage,
    GlossaryTermCreate,
    GlossaryTermRead,
    GlossaryTermUpdate,
    QnaAdminEmailCreate,
    QnaAdminEmailRead,
    QnaAdminEmailUpdate,
    QnaEmailLogRead,
    QuestionAnswer,
    QuestionRead,
    QuestionReceipt,
    QuestionSubmit,
)
from .settings import (
    AdminListRead,
    AdminSettingRead,
    AdminStatusRead,
    MenuVisibilityRead,
    MenuVisibilityUpdate,
    ProvinceRegionRead,
    ProvinceRegionUpdate,
    UserRoleRequest,
    VisibleMenuRead,
)
from .support_programs import (
    EmbeddingRunRead,
    FileAttachmentCreate,
    FileAttachmentRead,
    InstitutionCreate,
    InstitutionRead,
    PopularQueryRead,
    SupportProgramCreate,
    SupportProgramRead,
    SupportProgramUpdate,
    SupportSearchHit,
    SupportSearchResponse,
    TagCreate,
    TagRead,
)

__all__ = [
    "AdminListRead",
    "AdminSettingRead",
    "AdminStatusRead",
    "AnnouncementCreate",
    "AnnouncementRead",
    "AnnouncementUpdate",
    "ChatHistoryRead",
    "ChatMessageRead",
    "ChatRequest",
    "ChatResponse",
    "ChatSessionCreate",
    "ChatSessionRead",
    "ChatSessionUpdate",
    "ChatSourceRead",
    "EmbeddingRunRead",
    "ExchangeRateRead",
    "FileAttachmentCreate",
    "FileAttachmentRead",
    "GlossaryPage",
    "GlossaryTermCreate",
    "GlossaryTermRead",
    "GlossaryTermUpdate",
    "InstitutionCreate",
    "InstitutionRead",
    "KnowledgeDocumentCreate",
    "LegalDocumentCreate",
    "LegalDocumentRead",
    "LegalDocumentStatusUpdate",
    "LegalDocumentUpdate",
    "MenuVisibilityRead",
    "MenuVisibilityUpdate",
    "NewsletterRequest",
    "NewsletterSubscriberRead",
    "NotificationReport",
    "PopularQueryRead",
    "ProvinceRegionRead",
    "ProvinceRegionUpdate",
    "QnaAdminEmailCreate",
    "QnaAdminEmailRead",
    "QnaAdminEmailUpdate",
    "QnaEmailLogRead",
    "QuestionAnswer",
    "QuestionRead",
    "QuestionReceipt",
    "QuestionSubmit",
    "SupportProgramCreate",
    "SupportProgramRead",
    "SupportProgramUpdate",
    "SupportSearchHit",
    "SupportSearchResponse",
    "TagCreate",
    "TagRead",
    "UserRoleRequest",
    "VisibleMenuRead",
]

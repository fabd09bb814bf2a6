"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships. Importing it registers every table on the shared
SQLModel metadata.

Modules:
- support_programs: institutions, tags, support programs and their files
- content: announcements, legal documents, newsletter subscribers, e-mail logs
- settings: admin parameters, menu visibility, province region overrides
- users: user roles
- chat_sessions: assistant conversation history
- knowledge: knowledge base chunks for retrieval
- sectors: NACE sector eligibility table
- exchange_rates: daily exchange rates
- analytics: support search analytics
- qna: Soru-Sor questions and the admin notification addresses
- glossary: investor glossary terms
"""

from . import (
    analytics,
    chat_sessions,
    content,
    exchange_rates,
    glossary,
    knowledge,
    qna,
    sectors,
    settings,
    support_programs,
    users,
)

__all__ = [
    "analytics",
    "chat_sessions",
    "content",
    "exchange_rates",
    "glossary",
    "knowledge",
    "qna",
    "sectors",
    "settings",
    "support_programs",
    "users",
]

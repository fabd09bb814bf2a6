"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain.
Each module provides typed async data access operations for its entities.

Modules:
- base: AsyncBaseRepository interface, SQLModelRepository CRUD and QueryBuilder
- support_programs: programs, institutions, tags and files
- content: announcements, legal documents, newsletter, e-mail logs
- settings: admin settings, menu visibility, province regions
- users: user roles
- chat_sessions: chat sessions and messages
- knowledge: knowledge base chunks
- sectors: NACE sector table
- exchange_rates: daily exchange rates
- analytics: search analytics
- qna: questions and admin notification addresses
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

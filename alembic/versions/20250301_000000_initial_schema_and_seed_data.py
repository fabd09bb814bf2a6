"""Initial schema and seed data for the Teşvik Portal

Revision ID: 20250301_000000
Revises: None
Create Date: 2025-03-01 00:00:00.000000

This is the initial migration that creates all tables of the portal service
and seeds the defaults the application reads at runtime:
- Support program catalog (institutions, tag taxonomy, programs, files)
- Search analytics
- Knowledge base chunks, chat sessions and messages
- Content (announcements, legal documents, newsletter, e-mail log)
- Soru-Sor questions, QnA admin addresses and the investor glossary
- Admin settings, menu visibility, province region overrides, user roles
- Sector table for the NACE lookup and daily exchange rates
- Default incentive calculator parameters and menu visibility rows

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

INCENTIVE_DEFAULTS = [
    ("minimum_fixed_investment_amount", 6_000_000, "Minimum total fixed investment (TL)"),
    ("sgk_employer_premium_rate", 4355.92, "SGK employer premium base per employee per month (TL)"),
    ("sgk_employee_premium_rate", 3640.77, "SGK employee premium base per employee per month (TL)"),
]

MENU_DEFAULTS = [
    ("menu_item_destek_arama", True, False, False),
    ("menu_item_tesvik_araclari", True, False, False),
    ("menu_item_soru_cevap", True, False, False),
    ("menu_item_tedarik_zinciri", True, False, False),
    ("menu_item_yatirim_firsatlari", True, False, False),
    ("menu_item_yatirimci_sozlugu", True, False, False),
    ("menu_item_basvuru_sureci", True, False, False),
    ("menu_item_chat", True, True, False),
]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Support program catalog
    op.create_table(
        "institutions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_institutions_name", "name", unique=True),
    )

    op.create_table(
        "tag_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["category_id"], ["tag_categories.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tags_name", "name"),
        sa.Index("ix_tags_category_id", "category_id"),
    )

    op.create_table(
        "support_programs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("eligibility_criteria", sa.String(), nullable=True),
        sa.Column("contact_info", sa.String(), nullable=True),
        sa.Column("application_deadline", sa.Date(), nullable=True),
        sa.Column("institution_id", sa.Integer(), nullable=True),
        sa.Column("embedding", sa.JSON(none_as_null=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["institution_id"], ["institutions.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_support_programs_title", "title"),
        sa.Index("ix_support_programs_application_deadline", "application_deadline"),
        sa.Index("ix_support_programs_institution_id", "institution_id"),
        sa.Index("ix_support_programs_created_at", "created_at"),
    )

    op.create_table(
        "support_program_tags",
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["program_id"], ["support_programs.id"]),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"]),
        sa.PrimaryKeyConstraint("program_id", "tag_id"),
    )

    op.create_table(
        "file_attachments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.Column("filename", sa.String(), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["program_id"], ["support_programs.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_file_attachments_program_id", "program_id"),
    )

    op.create_table(
        "hybrid_search_analytics",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("query", sa.String(), nullable=False),
        sa.Column("search_source", sa.String(), nullable=False),
        sa.Column("total_response_time_ms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("support_match_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("session_id", sa.String(), nullable=True),
        sa.Column("cache_key", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_hybrid_search_analytics_query", "query"),
        sa.Index("ix_hybrid_search_analytics_search_source", "search_source"),
        sa.Index("ix_hybrid_search_analytics_created_at", "created_at"),
    )

    # Knowledge base and assistant chat
    op.create_table(
        "knowledge_chunks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("filename", sa.String(), nullable=False),
        sa.Column("chunk_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("embedding", sa.JSON(none_as_null=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_knowledge_chunks_filename", "filename"),
    )

    op.create_table(
        "chat_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("client_token", sa.String(length=64), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_chat_sessions_user_id", "user_id"),
        sa.Index("ix_chat_sessions_client_token", "client_token"),
        sa.Index("ix_chat_sessions_created_at", "created_at"),
    )

    op.create_table(
        "chat_messages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        # Enum columns store the member names
        sa.Column("role", ENUM("USER", "ASSISTANT", name="messagerole", create_type=True), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["session_id"], ["chat_sessions.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_chat_messages_session_id", "session_id"),
        sa.Index("ix_chat_messages_created_at", "created_at"),
    )

    # Content
    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("institution_name", sa.String(), nullable=False),
        sa.Column("institution_logo", sa.String(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("detail", sa.String(), nullable=False),
        sa.Column("announcement_date", sa.Date(), nullable=False),
        sa.Column("external_link", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_announcements_announcement_date", "announcement_date"),
        sa.Index("ix_announcements_is_active", "is_active"),
    )

    op.create_table(
        "legal_documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("document_type", sa.String(), nullable=False),
        sa.Column("document_number", sa.String(), nullable=True),
        sa.Column("ministry", sa.String(), nullable=True),
        sa.Column("publication_date", sa.Date(), nullable=True),
        sa.Column("file_url", sa.String(), nullable=True),
        sa.Column("external_url", sa.String(), nullable=True),
        sa.Column("keywords", sa.String(), nullable=True),
        sa.Column("status", ENUM("ACTIVE", "INACTIVE", name="documentstatus", create_type=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_legal_documents_title", "title"),
        sa.Index("ix_legal_documents_document_type", "document_type"),
        sa.Index("ix_legal_documents_status", "status"),
    )

    op.create_table(
        "newsletter_subscribers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("subscribed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("unsubscribed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_newsletter_subscribers_email", "email", unique=True),
        sa.Index("ix_newsletter_subscribers_is_active", "is_active"),
    )

    # Soru-Sor questions and the investor glossary
    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("province", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("question", sa.String(), nullable=False),
        sa.Column("answer", sa.String(), nullable=True),
        sa.Column(
            "status",
            ENUM("UNANSWERED", "ANSWERED", "RETURNED", "APPROVED", name="questionstatus", create_type=True),
            nullable=False,
        ),
        sa.Column("admin_notes", sa.String(), nullable=True),
        sa.Column("answered_by", sa.String(), nullable=True),
        sa.Column("answered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sent_to_user", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_questions_email", "email"),
        sa.Index("ix_questions_province", "province"),
        sa.Index("ix_questions_status", "status"),
        sa.Index("ix_questions_created_at", "created_at"),
    )

    op.create_table(
        "qna_admin_emails",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_qna_admin_emails_email", "email", unique=True),
        sa.Index("ix_qna_admin_emails_is_active", "is_active"),
    )

    op.create_table(
        "glossary_terms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("term", sa.String(), nullable=False),
        sa.Column("definition", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_glossary_terms_term", "term", unique=True),
    )

    op.create_table(
        "email_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("announcement_id", sa.Integer(), nullable=True),
        sa.Column("question_id", sa.Integer(), nullable=True),
        sa.Column("recipient", sa.String(), nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("status", ENUM("SENT", "FAILED", name="emailstatus", create_type=True), nullable=False),
        sa.Column("error_message", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["announcement_id"], ["announcements.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_email_logs_announcement_id", "announcement_id"),
        sa.Index("ix_email_logs_question_id", "question_id"),
        sa.Index("ix_email_logs_created_at", "created_at"),
    )

    # Settings and roles
    op.create_table(
        "admin_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("setting_key", sa.String(), nullable=False),
        sa.Column("setting_value", sa.Float(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_admin_settings_setting_key", "setting_key", unique=True),
        sa.Index("ix_admin_settings_category", "category"),
    )

    op.create_table(
        "menu_visibility_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("setting_key", sa.String(), nullable=False),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("registered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_menu_visibility_settings_setting_key", "setting_key", unique=True),
    )

    op.create_table(
        "province_regions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("province", sa.String(), nullable=False),
        sa.Column("region", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("region BETWEEN 1 AND 6", name="ck_province_regions_region"),
        sa.Index("ix_province_regions_province", "province", unique=True),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role", ENUM("ADMIN", "USER", name="approle", create_type=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
        sa.Index("ix_user_roles_user_id", "user_id"),
    )

    # Reference data
    op.create_table(
        "sector_search",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("nace_kodu", sa.String(), nullable=False),
        sa.Column("sektor", sa.String(), nullable=False),
        sa.Column("hedef_yatirim", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("oncelikli_yatirim", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("yuksek_teknoloji", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("orta_yuksek_teknoloji", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sartlar", sa.String(), nullable=True),
        *[sa.Column(f"bolge_{i}", sa.Float(), nullable=True) for i in range(1, 7)],
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_sector_search_nace_kodu", "nace_kodu"),
    )

    op.create_table(
        "exchange_rates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("rate_date", sa.Date(), nullable=False),
        sa.Column("usd_buying", sa.Float(), nullable=True),
        sa.Column("usd_selling", sa.Float(), nullable=True),
        sa.Column("eur_buying", sa.Float(), nullable=True),
        sa.Column("eur_selling", sa.Float(), nullable=True),
        sa.Column("gbp_buying", sa.Float(), nullable=True),
        sa.Column("gbp_selling", sa.Float(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_exchange_rates_rate_date", "rate_date", unique=True),
    )

    # ============================================================================
    # SEED DATA
    # ============================================================================

    now = datetime.now(timezone.utc)

    admin_settings = sa.table(
        "admin_settings",
        sa.column("setting_key", sa.String),
        sa.column("setting_value", sa.Float),
        sa.column("category", sa.String),
        sa.column("description", sa.String),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    op.bulk_insert(
        admin_settings,
        [
            {
                "setting_key": key,
                "setting_value": value,
                "category": "incentive_calculation",
                "description": description,
                "created_at": now,
                "updated_at": now,
            }
            for key, value, description in INCENTIVE_DEFAULTS
        ],
    )

    menu_visibility = sa.table(
        "menu_visibility_settings",
        sa.column("setting_key", sa.String),
        sa.column("admin", sa.Boolean),
        sa.column("registered", sa.Boolean),
        sa.column("anonymous", sa.Boolean),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    op.bulk_insert(
        menu_visibility,
        [
            {"setting_key": key, "admin": admin, "registered": registered, "anonymous": anonymous, "updated_at": now}
            for key, admin, registered, anonymous in MENU_DEFAULTS
        ],
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("exchange_rates")
    op.drop_table("sector_search")
    op.drop_table("user_roles")
    op.drop_table("province_regions")
    op.drop_table("menu_visibility_settings")
    op.drop_table("admin_settings")
    op.drop_table("email_logs")
    op.drop_table("glossary_terms")
    op.drop_table("qna_admin_emails")
    op.drop_table("questions")
    op.drop_table("newsletter_subscribers")
    op.drop_table("legal_documents")
    op.drop_table("announcements")
    op.drop_table("chat_messages")
    op.drop_table("chat_sessions")
    op.drop_table("knowledge_chunks")
    op.drop_table("hybrid_search_analytics")
    op.drop_table("file_attachments")
    op.drop_table("support_program_tags")
    op.drop_table("support_programs")
    op.drop_table("tags")
    op.drop_table("tag_categories")
    op.drop_table("institutions")

    # Drop the enum types
    for enum_name in ("approle", "emailstatus", "documentstatus", "messagerole", "questionstatus"):
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")

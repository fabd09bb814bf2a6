"""
Support program entity models.

This module contains the catalogue of support programs offered by public
institutions, together with their tag taxonomy and attached files:

- institutions: granting institutions (ministries, agencies, development banks)
- tag_categories / tags: two-level taxonomy used for structured filtering
- support_programs: the programs themselves, with an optional text embedding
- support_program_tags: many-to-many link between programs and tags
- file_attachments: downloadable documents for a program
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, timestamp_field


class Institution(Base, table=True):
    """Institution granting support programs.

    Table: institutions
    """

    __tablename__ = "institutions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, description="Institution name")
    description: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    created_at: datetime = timestamp_field()

    def __repr__(self) -> str:
        return f"Institution(id={self.id}, name={self.name})"


class TagCategory(Base, table=True):
    """Group of tags (sector, applicant type, support type...).

    Table: tag_categories
    """

    __tablename__ = "tag_categories"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    display_order: int = Field(default=0)


class Tag(Base, table=True):
    """Filterable tag attached to support programs.

    Table: tags
    """

    __tablename__ = "tags"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="tag_categories.id", index=True)


class SupportProgram(Base, table=True):
    """A support program published on the portal.

    ``embedding`` holds the program's text embedding as a JSON float array;
    it is cleared whenever a text field changes and regenerated on demand.

    Table: support_programs
    """

    __tablename__ = "support_programs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True, description="Program title")
    description: Optional[str] = Field(default=None)
    eligibility_criteria: Optional[str] = Field(default=None)
    contact_info: Optional[str] = Field(default=None)
    application_deadline: Optional[date] = Field(default=None, index=True)
    institution_id: Optional[int] = Field(default=None, foreign_key="institutions.id", index=True)
    embedding: Optional[List[float]] = Field(default=None, sa_column=Column(JSON(none_as_null=True), nullable=True))
    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(on_update=True)

    def __repr__(self) -> str:
        return f"SupportProgram(id={self.id}, title={self.title})"


class SupportProgramTag(Base, table=True):
    """Link table between programs and tags.

    Table: support_program_tags
    """

    __tablename__ = "support_program_tags"
    __table_args__ = ({"extend_existing": True},)

    program_id: int = Field(foreign_key="support_programs.id", primary_key=True)
    tag_id: int = Field(foreign_key="tags.id", primary_key=True)


class FileAttachment(Base, table=True):
    """Document attached to a support program.

    Table: file_attachments
    """

    __tablename__ = "file_attachments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    program_id: int = Field(foreign_key="support_programs.id", index=True)
    filename: str
    file_url: str
    display_order: int = Field(default=0)
    created_at: datetime = timestamp_field()

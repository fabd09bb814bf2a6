"""
Support program I/O models for API requests and responses.

Programs are returned with their institution, tags and files resolved, so the
client never has to follow foreign keys itself.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InstitutionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    website: Optional[str] = None


class InstitutionCreate(BaseModel):
    name: str = Field(min_length=1, description="Institution name")
    description: Optional[str] = None
    website: Optional[str] = None


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category_id: Optional[int] = None
    category_name: Optional[str] = Field(default=None, description="Name of the tag category")


class TagCreate(BaseModel):
    name: str = Field(min_length=1)
    category_id: Optional[int] = None


class FileAttachmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    file_url: str
    display_order: int = 0


class FileAttachmentCreate(BaseModel):
    filename: str = Field(min_length=1)
    file_url: str = Field(min_length=1, description="Public URL of the stored file")
    display_order: int = 0


class SupportProgramRead(BaseModel):
    """Schema for reading a support program with its relations."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    eligibility_criteria: Optional[str] = None
    contact_info: Optional[str] = None
    application_deadline: Optional[date] = None
    institution_id: Optional[int] = None
    institution: Optional[InstitutionRead] = None
    tags: List[TagRead] = Field(default_factory=list)
    files: List[FileAttachmentRead] = Field(default_factory=list)
    has_embedding: bool = Field(default=False, description="Whether the program takes part in semantic search")
    created_at: datetime
    updated_at: datetime


class SupportProgramCreate(BaseModel):
    """Schema for creating a support program."""

    title: str = Field(min_length=1, description="Program title")
    description: Optional[str] = None
    eligibility_criteria: Optional[str] = None
    contact_info: Optional[str] = None
    application_deadline: Optional[date] = None
    institution_id: Optional[int] = None
    tag_ids: List[int] = Field(default_factory=list, description="Tags attached to the program")


class SupportProgramUpdate(BaseModel):
    """Schema for updating a support program; omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    eligibility_criteria: Optional[str] = None
    contact_info: Optional[str] = None
    application_deadline: Optional[date] = None
    institution_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None


class SupportSearchHit(BaseModel):
    program: SupportProgramRead
    score: float
    match_type: str = Field(description="keyword, semantic, hybrid or browse")


class SupportSearchResponse(BaseModel):
    results: List[SupportSearchHit]
    total: int
    query: Optional[str] = None


class PopularQueryRead(BaseModel):
    query: str
    search_count: int
    avg_response_time_ms: float


class EmbeddingRunRead(BaseModel):
    total: int
    success_count: int
    error_count: int

"""
API endpoints for support programs, institutions and tags.

Programs are always returned with their institution, tags (with category
names) and attached files resolved. Reads are public; changes are admin only.
Changing a program's title, description, eligibility or institution clears
its embedding, so the program drops out of semantic search until the
embeddings are regenerated.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database import get_session
from tesvik_portal.core.database.entities.support_programs import (
    FileAttachment,
    Institution,
    SupportProgram,
    Tag,
    TagCategory,
)
from tesvik_portal.core.database.repositories.support_programs import (
    InstitutionRepository,
    ProgramRelations,
    SupportProgramRepository,
    TagRepository,
)
from tesvik_portal.core.errors import NotFoundError, ValidationFailedError
from tesvik_portal.core.models.io import (
    FileAttachmentCreate,
    FileAttachmentRead,
    InstitutionCreate,
    InstitutionRead,
    SupportProgramCreate,
    SupportProgramRead,
    SupportProgramUpdate,
    TagCreate,
    TagRead,
)
from tesvik_portal.search.embeddings import EMBEDDED_FIELDS
from tesvik_portal.server.core.security import require_admin

router = APIRouter(tags=["support-programs"])
institutions_router = APIRouter(tags=["institutions"])
tags_router = APIRouter(tags=["tags"])


def program_read(relations: ProgramRelations) -> SupportProgramRead:
    program = relations.program
    return SupportProgramRead(
        id=program.id,
        title=program.title,
        description=program.description,
        eligibility_criteria=program.eligibility_criteria,
        contact_info=program.contact_info,
        application_deadline=program.application_deadline,
        institution_id=program.institution_id,
        institution=InstitutionRead.model_validate(relations.institution) if relations.institution else None,
        tags=[
            TagRead(id=tag.id, name=tag.name, category_id=tag.category_id, category_name=category_name)
            for tag, category_name in relations.tags
        ],
        files=[FileAttachmentRead.model_validate(f) for f in relations.files],
        has_embedding=bool(program.embedding),
        created_at=program.created_at,
        updated_at=program.updated_at,
    )


async def _get_program(repo: SupportProgramRepository, program_id: int) -> SupportProgram:
    program = await repo.get_by_id(program_id)
    if program is None:
        raise NotFoundError(f"Support program {program_id} not found")
    return program


async def _check_references(
    repo: SupportProgramRepository, institution_id: Optional[int], tag_ids: Optional[List[int]]
) -> None:
    """Reject unknown institution and tag ids before anything is written.

    Raises:
        ValidationFailedError: An id has no row (400, ``details`` names the ids).
    """
    if institution_id is not None and not await repo.institutions_by_id([institution_id]):
        raise ValidationFailedError(
            f"Institution {institution_id} not found", details={"institution_id": institution_id}
        )
    missing = await repo.missing_tag_ids(tag_ids or [])
    if missing:
        raise ValidationFailedError(f"Unknown tag ids: {missing}", details={"tag_ids": missing})


@router.get(
    "",
    response_model=List[SupportProgramRead],
    summary="List Support Programs",
    description="Retrieve all support programs, newest first, with their relations.",
)
async def list_programs(session: AsyncSession = Depends(get_session)) -> List[SupportProgramRead]:
    repo = SupportProgramRepository(session)
    programs = await repo.filter_programs()
    return [program_read(r) for r in await repo.load_relations(programs)]


@router.get(
    "/{program_id}",
    response_model=SupportProgramRead,
    summary="Get Support Program",
    responses={404: {"description": "Support program not found"}},
)
async def get_program(program_id: int, session: AsyncSession = Depends(get_session)) -> SupportProgramRead:
    repo = SupportProgramRepository(session)
    program = await _get_program(repo, program_id)
    return program_read((await repo.load_relations([program]))[0])


@router.post(
    "",
    response_model=SupportProgramRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Support Program",
    description="Create a support program and attach its tags. Admin only.",
    responses={
        201: {"description": "Support program created"},
        400: {"description": "Unknown institution or tag"},
        401: {"description": "Authentication required"},
        403: {"description": "Admin role required"},
    },
)
async def create_program(
    payload: SupportProgramCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> SupportProgramRead:
    repo = SupportProgramRepository(session)
    await _check_references(repo, payload.institution_id, payload.tag_ids)
    program = await repo.save_with_tags(SupportProgram(**payload.model_dump(exclude={"tag_ids"})), payload.tag_ids)
    return program_read((await repo.load_relations([program]))[0])


@router.patch(
    "/{program_id}",
    response_model=SupportProgramRead,
    summary="Update Support Program",
    description="Update the given fields of a support program. Admin only.",
    responses={
        200: {"description": "Support program updated"},
        400: {"description": "Unknown institution or tag"},
        404: {"description": "Support program not found"},
    },
)
async def update_program(
    program_id: int,
    payload: SupportProgramUpdate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> SupportProgramRead:
    """
    Update a support program.

    Only fields present in the request body are changed. ``tag_ids`` replaces
    the whole tag set. Text changes invalidate the stored embedding.
    """
    repo = SupportProgramRepository(session)
    program = await _get_program(repo, program_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"tag_ids"})
    await _check_references(repo, changes.get("institution_id"), payload.tag_ids)
    text_changed = any(key in EMBEDDED_FIELDS and getattr(program, key) != value for key, value in changes.items())
    for key, value in changes.items():
        setattr(program, key, value)
    if text_changed:
        program.embedding = None
    program = await repo.save_with_tags(program, payload.tag_ids)
    return program_read((await repo.load_relations([program]))[0])


@router.delete(
    "/{program_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Support Program",
    description="Delete a support program with its tag links and file records. Admin only.",
    responses={404: {"description": "Support program not found"}},
)
async def delete_program(
    program_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    if not await SupportProgramRepository(session).delete(program_id):
        raise NotFoundError(f"Support program {program_id} not found")


@router.post(
    "/{program_id}/files",
    response_model=FileAttachmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Attach File",
    description="Record an already uploaded file for a support program. Admin only.",
    responses={404: {"description": "Support program not found"}},
)
async def add_file(
    program_id: int,
    payload: FileAttachmentCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> FileAttachmentRead:
    repo = SupportProgramRepository(session)
    await _get_program(repo, program_id)
    attachment = await repo.add_file(FileAttachment(program_id=program_id, **payload.model_dump()))
    return FileAttachmentRead.model_validate(attachment)


@router.delete(
    "/{program_id}/files/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove File",
    responses={404: {"description": "File not found"}},
)
async def delete_file(
    program_id: int,
    file_id: int,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> None:
    attachment = await session.get(FileAttachment, file_id)
    if attachment is None or attachment.program_id != program_id:
        raise NotFoundError(f"File {file_id} not found for support program {program_id}")
    await session.delete(attachment)
    await session.commit()


@institutions_router.get("", response_model=List[InstitutionRead], summary="List Institutions")
async def list_institutions(session: AsyncSession = Depends(get_session)) -> List[InstitutionRead]:
    return [InstitutionRead.model_validate(i) for i in await InstitutionRepository(session).list()]


@institutions_router.post(
    "",
    response_model=InstitutionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Institution",
    description="Create an institution. Admin only.",
)
async def create_institution(
    payload: InstitutionCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> InstitutionRead:
    institution = await InstitutionRepository(session).create(Institution(**payload.model_dump()))
    return InstitutionRead.model_validate(institution)


@tags_router.get(
    "",
    response_model=List[TagRead],
    summary="List Tags",
    description="Retrieve all tags with their category names, grouped by category order.",
)
async def list_tags(session: AsyncSession = Depends(get_session)) -> List[TagRead]:
    rows = await TagRepository(session).list_with_categories()
    return [
        TagRead(id=tag.id, name=tag.name, category_id=tag.category_id, category_name=category_name)
        for tag, category_name in rows
    ]


@tags_router.post(
    "",
    response_model=TagRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Tag",
    description="Create a tag. Admin only.",
)
async def create_tag(
    payload: TagCreate,
    session: AsyncSession = Depends(get_session),
    _admin: str = Depends(require_admin),
) -> TagRead:
    if payload.category_id is not None and await session.get(TagCategory, payload.category_id) is None:
        raise ValidationFailedError(
            f"Tag category {payload.category_id} not found", details={"category_id": payload.category_id}
        )
    tag = await TagRepository(session).create(Tag(**payload.model_dump()))
    return TagRead.model_validate(tag)

"""Support-program embedding maintenance."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from tesvik_portal.clients.openai_embeddings import Embedder
from tesvik_portal.core.database.entities.support_programs import SupportProgram
from tesvik_portal.core.database.repositories.support_programs import SupportProgramRepository
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.core.logging_config import get_logger

logger = get_logger(__name__)

EMBEDDED_FIELDS = ("title", "description", "eligibility_criteria", "institution_id")


class EmbeddingRunSummary(BaseModel):
    total: int
    success_count: int
    error_count: int


def program_embedding_text(program: SupportProgram, institution_name: Optional[str] = None) -> str:
    """Text that represents a program in the embedding space."""
    parts = [program.title, program.description, program.eligibility_criteria, institution_name]
    return " | ".join(p.strip() for p in parts if p and p.strip())


class ProgramEmbeddingService:
    def __init__(self, repo: SupportProgramRepository, embedder: Embedder) -> None:
        self.repo = repo
        self.embedder = embedder

    async def _embed(self, program: SupportProgram, institution_name: Optional[str]) -> SupportProgram:
        program.embedding = await self.embedder.embed(program_embedding_text(program, institution_name))
        return await self.repo.update(program)

    async def generate_program_embedding(self, program_id: int) -> SupportProgram:
        program = await self.repo.get_by_id(program_id)
        if program is None:
            raise NotFoundError(f"Support program {program_id} not found")
        institutions = await self.repo.institutions_by_id([program.institution_id])
        institution = institutions.get(program.institution_id) if program.institution_id else None
        return await self._embed(program, institution.name if institution else None)

    async def generate_missing_embeddings(self) -> EmbeddingRunSummary:
        """Embed every program without an embedding; one failure does not stop the run."""
        programs = await self.repo.without_embedding()
        institutions = await self.repo.institutions_by_id(p.institution_id for p in programs)
        logger.info(f"Found {len(programs)} programs without embeddings")

        names = {p.id: institutions[p.institution_id].name for p in programs if p.institution_id in institutions}
        # Reloaded per iteration: a rollback expires every instance in the session
        program_ids = [p.id for p in programs]

        success = 0
        errors = 0
        for program_id in program_ids:
            try:
                program = await self.repo.get_by_id(program_id)
                await self._embed(program, names.get(program_id))
                success += 1
            except Exception as e:
                logger.error(f"Error generating embedding for program {program_id}: {e}")
                await self.repo.session.rollback()
                errors += 1
        return EmbeddingRunSummary(total=len(programs), success_count=success, error_count=errors)

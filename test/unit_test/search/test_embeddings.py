"""Unit tests for support-program embedding maintenance."""

import pytest

from tesvik_portal.core.database.entities.support_programs import Institution, SupportProgram
from tesvik_portal.core.database.repositories.support_programs import SupportProgramRepository
from tesvik_portal.core.errors import NotFoundError
from tesvik_portal.search.embeddings import ProgramEmbeddingService, program_embedding_text


def test_embedding_text_skips_empty_parts():
    program = SupportProgram(title="İhracat Desteği", description="  ", eligibility_criteria="KOBİ olmak")
    assert program_embedding_text(program, "KOSGEB") == "İhracat Desteği | KOBİ olmak | KOSGEB"
    assert program_embedding_text(program) == "İhracat Desteği | KOBİ olmak"


async def test_generate_program_embedding(session, embedder_factory):
    institution = Institution(name="KOSGEB")
    session.add(institution)
    await session.commit()
    program = SupportProgram(title="İhracat Desteği", institution_id=institution.id)
    session.add(program)
    await session.commit()

    embedder = embedder_factory(["ihracat", "kosgeb"])
    updated = await ProgramEmbeddingService(SupportProgramRepository(session), embedder).generate_program_embedding(
        program.id
    )

    assert updated.embedding == [1.0, 1.0]
    assert embedder.calls == ["İhracat Desteği | KOSGEB"]


async def test_generate_program_embedding_unknown_id(session, embedder_factory):
    service = ProgramEmbeddingService(SupportProgramRepository(session), embedder_factory(["x"]))
    with pytest.raises(NotFoundError):
        await service.generate_program_embedding(404)


async def test_generate_missing_embeddings_continues_after_failure(session, embedder_factory):
    session.add_all(
        [
            SupportProgram(title="Birinci"),
            SupportProgram(title="Bozuk"),
            SupportProgram(title="Üçüncü"),
            SupportProgram(title="Hazır", embedding=[0.5]),
        ]
    )
    await session.commit()

    class FlakyEmbedder:
        async def embed(self, text):
            if text == "Bozuk":
                raise RuntimeError("boom")
            return [1.0]

    repo = SupportProgramRepository(session)
    summary = await ProgramEmbeddingService(repo, FlakyEmbedder()).generate_missing_embeddings()

    assert (summary.total, summary.success_count, summary.error_count) == (3, 2, 1)
    assert [p.title for p in await repo.without_embedding()] == ["Bozuk"]

from tesvik_portal.rag.chunking import chunk_text, split_sentences


def test_split_sentences_keeps_trailing_text():
    assert split_sentences("Bir. İki! Üç? Son kısım") == ["Bir.", "İki!", "Üç?", "Son kısım"]


class TestChunkText:
    def test_empty_input(self):
        assert chunk_text("") == []
        assert chunk_text("   \n ") == []

    def test_short_text_is_one_chunk(self):
        assert chunk_text("Bir. İki! Üç?") == ["Bir. İki! Üç?"]

    def test_closes_chunk_before_overflow(self):
        assert chunk_text("Bir. İki! Üç?", chunk_size=9) == ["Bir. İki!", "Üç?"]

    def test_long_sentence_is_its_own_chunk(self):
        long_sentence = "Yatırım teşvik belgesi başvurusu elektronik ortamda yapılır."
        chunks = chunk_text(f"Kısa. {long_sentence} Son.", chunk_size=20)
        assert chunks == ["Kısa.", long_sentence, "Son."]

    def test_chunks_respect_size(self):
        text = " ".join(f"Cümle numarası {i}." for i in range(50))
        chunks = chunk_text(text, chunk_size=100)
        assert len(chunks) > 1
        assert all(len(chunk) <= 100 for chunk in chunks)
        assert " ".join(chunks) == text

"""Unit tests for NACE code and sector name lookup."""

from tesvik_portal.core.database.entities.sectors import SectorSearch
from tesvik_portal.incentives.nace import (
    DISAMBIGUATION_HEADER,
    extract_nace_code,
    format_sector,
    lookup_nace,
    normalize_nace_code,
    relevance,
)


def sector(code: str, name: str, **kwargs) -> SectorSearch:
    return SectorSearch(nace_kodu=code, sektor=name, **kwargs)


ROWS = [
    sector("C10.61.01", "Un üretimi", hedef_yatirim=True, bolge_1=20_000_000, bolge_6=5_000_000),
    sector("C10.71.01", "Ekmek üretimi"),
    sector("C10.73.01", "Makarna üretimi"),
    sector("C20.13.01", "Diğer temel inorganik kimyasalların imalatı", oncelikli_yatirim=True, sartlar="Kapasite şartı"),
]


class TestCodeParsing:
    def test_normalize(self):
        assert normalize_nace_code(" C20.13 ") == "20.13"
        assert normalize_nace_code("20.13") == "20.13"

    def test_extract(self):
        assert extract_nace_code("20.13 teşvik alır mı?") == "20.13"
        assert extract_nace_code("10.61.01 için koşullar") == "10.61.01"
        assert extract_nace_code("un üretimi") is None


def test_format_sector():
    text = format_sector(ROWS[0])
    assert text.splitlines() == [
        "C10.61.01 – Un üretimi",
        "hedef yatırımdır",
        "Asgari yatırım tutarı: 1. bölge için 20.000.000 TL, 6. bölge için 5.000.000 TL.",
    ]
    assert "Koşullar: Kapasite şartı" in format_sector(ROWS[3])


def test_relevance_skips_short_words_but_counts_them():
    assert relevance("un üretimi", "Un üretimi") == 0.5
    assert relevance("ekmek", "Ekmek üretimi") == 1.0


class TestLookup:
    def test_code_wins(self):
        result = lookup_nace("20.13 teşvik alır mı?", ROWS)
        assert result.found is True
        assert result.answer.startswith("C20.13.01 – Diğer temel")
        assert "öncelikli yatırımdır" in result.answer

    def test_single_fuzzy_match(self):
        result = lookup_nace("ekmek", ROWS)
        assert result.found is True
        assert result.is_disambiguation is False
        assert result.answer.startswith("C10.71.01 – Ekmek üretimi")

    def test_disambiguation_puts_substring_match_first(self):
        result = lookup_nace("un üretimi", ROWS)
        assert result.is_disambiguation is True
        assert result.matches == 3
        lines = result.answer.splitlines()
        assert lines[0] == DISAMBIGUATION_HEADER
        assert lines[1] == "1) C10.61.01 – Un üretimi"

    def test_too_many_results(self):
        rows = [sector(f"C10.{i}", f"Gıda ürünü {i} üretimi") for i in range(10, 16)]
        result = lookup_nace("üretimi", rows)
        assert result.is_disambiguation is True
        assert result.matches == 6
        assert "6 kayıt" in result.answer

    def test_not_found(self):
        assert lookup_nace("uzay turizmi", ROWS).found is False

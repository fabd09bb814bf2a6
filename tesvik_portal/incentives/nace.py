"""NACE code and sector name lookup.

Answers questions such as "20.13 teşvik alır mı?" or "un üretimi" from the
sector eligibility table. A NACE code found in the question wins over the
fuzzy sector-name match.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel

from tesvik_portal.core.database.entities.sectors import SectorSearch
from tesvik_portal.core.logging_config import get_logger
from tesvik_portal.core.text import format_thousands, turkish_lower

logger = get_logger(__name__)

NACE_PATTERN = re.compile(r"\b[0-9]{2}(?:\.[0-9]{1,2}){0,2}\b")
MIN_TOKEN_LENGTH = 3
RELEVANCE_THRESHOLD = 0.3
MAX_DISAMBIGUATION = 5

DISAMBIGUATION_HEADER = "Birden fazla kayıt bulundu, hangisini kastediyorsunuz?"
TOO_MANY_TEMPLATE = "Çok fazla sonuç bulundu ({count} kayıt). Lütfen daha spesifik bir sorgu yapın."


class NaceLookupResult(BaseModel):
    found: bool
    answer: str = ""
    is_disambiguation: bool = False
    matches: Optional[int] = None


def normalize_nace_code(code: str) -> str:
    """``C20.13`` -> ``20.13``."""
    return re.sub(r"^C", "", code.strip())


def extract_nace_code(question: str) -> Optional[str]:
    match = NACE_PATTERN.search(question or "")
    return normalize_nace_code(match.group(0)) if match else None


def format_sector(row: SectorSearch) -> str:
    """Render a sector row as the multi-line Turkish answer."""
    lines = [f"{row.nace_kodu} – {row.sektor}"]
    if row.hedef_yatirim:
        lines.append("hedef yatırımdır")
    if row.oncelikli_yatirim:
        lines.append("öncelikli yatırımdır")
    if row.yuksek_teknoloji:
        lines.append("Yüksek teknoloji yatırımdır")
    if row.orta_yuksek_teknoloji:
        lines.append("Orta-Yüksek teknoloji yatırımdır")
    if row.sartlar and row.sartlar.strip():
        lines.append(f"Koşullar: {row.sartlar}")

    regions = [
        f"{index}. bölge için {format_thousands(amount)} TL"
        for index, amount in enumerate(row.regional_minimums(), start=1)
        if amount
    ]
    if regions:
        lines.append(f"Asgari yatırım tutarı: {', '.join(regions)}.")
    return "\n".join(lines)


def relevance(query: str, sector: str) -> float:
    """Share of query words (3+ letters) that overlap a word of the sector name."""
    query_tokens = turkish_lower(query).split()
    sector_tokens = turkish_lower(sector).split()
    hits = 0
    for token in query_tokens:
        if len(token) < MIN_TOKEN_LENGTH:
            continue
        if any(st in token or token in st for st in sector_tokens):
            hits += 1
    return hits / max(len(query_tokens), 1)


def _fuzzy_matches(question: str, rows: Sequence[SectorSearch]) -> List[SectorSearch]:
    lowered = turkish_lower(question.strip())
    scored: List[Tuple[bool, float, SectorSearch]] = []
    for row in rows:
        score = relevance(question, row.sektor)
        substring = bool(lowered) and lowered in turkish_lower(row.sektor)
        if score > RELEVANCE_THRESHOLD or substring:
            scored.append((substring, score, row))
    # Stable: substring matches first, then by relevance
    scored.sort(key=lambda item: (not item[0], -item[1]))
    return [row for _, _, row in scored]


def lookup_nace(question: str, rows: Sequence[SectorSearch]) -> NaceLookupResult:
    """Look a question up in the sector table.

    Args:
        question: Free text, optionally containing a NACE code
        rows: The sector table, ordered by NACE code

    Returns:
        A found answer, a disambiguation list, a "too many results" message
        or ``found=False``.
    """
    code = extract_nace_code(question)
    if code:
        logger.debug(f"Detected NACE code: {code}")
        for row in rows:
            if normalize_nace_code(row.nace_kodu).startswith(code):
                return NaceLookupResult(found=True, answer=format_sector(row))

    matches = _fuzzy_matches(question, rows)
    logger.debug(f"Found {len(matches)} fuzzy sector matches for {question!r}")

    if not matches:
        return NaceLookupResult(found=False)
    if len(matches) == 1:
        return NaceLookupResult(found=True, answer=format_sector(matches[0]))
    if len(matches) <= MAX_DISAMBIGUATION:
        options = "\n".join(f"{i}) {row.nace_kodu} – {row.sektor}" for i, row in enumerate(matches, start=1))
        return NaceLookupResult(
            found=True,
            answer=f"{DISAMBIGUATION_HEADER}\n{options}",
            is_disambiguation=True,
            matches=len(matches),
        )
    return NaceLookupResult(
        found=True,
        answer=TOO_MANY_TEMPLATE.format(count=len(matches)),
        is_disambiguation=True,
        matches=len(matches),
    )

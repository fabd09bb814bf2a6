"""Text and vector helpers shared by the search, NACE and RAG modules.

Turkish needs its own case mapping: ``"I".lower()`` is ``"i"`` in Python but
``"ı"`` in Turkish, and ``"İ".lower()`` yields ``"i̇"`` (with a combining dot).
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

_TOKEN_RE = re.compile(r"[0-9a-zçğıöşü]+")

_FOLD_TABLE = str.maketrans(
    {
        "ç": "c",
        "ğ": "g",
        "ı": "i",
        "ö": "o",
        "ş": "s",
        "ü": "u",
        "â": "a",
        "î": "i",
        "û": "u",
    }
)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def turkish_lower(text: str) -> str:
    return text.replace("I", "ı").replace("İ", "i").lower()


def fold(text: str) -> str:
    """Lowercase with Turkish rules and strip Turkish diacritics."""
    return turkish_lower(text).translate(_FOLD_TABLE)


def tokenize(text: Optional[str], min_length: int = 1) -> List[str]:
    """Split text into lowercase Turkish word tokens."""
    if not text:
        return []
    return [t for t in _TOKEN_RE.findall(turkish_lower(text)) if len(t) >= min_length]


def contains_any(text: str, needles: Iterable[str]) -> bool:
    lowered = turkish_lower(text)
    return any(n in lowered for n in needles)


def format_thousands(amount: float) -> str:
    """Format an amount with Turkish thousands separators: 1000000 -> '1.000.000'."""
    return f"{int(round(amount)):,}".replace(",", ".")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 when undefined."""
    if not a or not b or len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)

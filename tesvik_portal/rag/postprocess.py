"""Post-processing of generated answers.

- Yerel Kalkınma Hamlesi badge: answers about a province's local development
  investment topics always end with the programme link and a badge tag that
  the frontend renders as a button.
- Follow-up question extraction: a trailing question paragraph ("Hangi ilde
  yatırım yapmayı planlıyorsunuz?") is split off so the UI can show it as a
  suggestion.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

PROGRAMME_URL = "https://yerelkalkinmahamlesi.gov.tr"
PROGRAMME_DOMAIN = "yerelkalkinmahamlesi.gov.tr"
INFO_SENTENCE = f"Başvuru ve detaylı bilgi için {PROGRAMME_URL} adresini ziyaret edin."
BADGE_TAG = f"[badge: Yerel Kalkınma Hamlesi|{PROGRAMME_URL}]"

_BADGE_TRIGGER = re.compile(
    r"^(?:Soru:\s*)?[A-Za-zÇĞİÖŞÜçğıöşü\s\-]+Yerel Kalkınma Hamlesi Yatırım Konuları",
    re.IGNORECASE,
)

_FOLLOW_UP_PATTERNS = [
    re.compile(
        r"\n\n([^.!?\n]*(?:planlıyorsunuz|belirtir misiniz|ister misiniz|paylaşır mısınız|söyler misiniz"
        r"|bildirir misiniz|bildirmeniz|paylaşmanız)\??)\s*$",
        re.IGNORECASE,
    ),
    re.compile(r"\n\n((?:Bu|Hangi|Lütfen)[^.!?\n]*(?:il|sektör|ilçe|OSB|bölge)[^.!?\n]*\??)\s*$", re.IGNORECASE),
    re.compile(r"\n\n(Hangi\s+[^.!?\n]+\??)\s*$", re.IGNORECASE),
    re.compile(r"\n\n([^.!?\n]*OSB[^.!?\n]*\??)\s*$", re.IGNORECASE),
    re.compile(r"\n\n([^.!?\n]{20,}(?:mı|mi|mu|mü|musunuz|misiniz|nedir|nelerdir)\??)\s*$", re.IGNORECASE),
]


def should_append_badge(answer: Optional[str]) -> bool:
    return bool(_BADGE_TRIGGER.match((answer or "").strip()))


def append_info_and_badge(answer: Optional[str]) -> str:
    """Append the info sentence and the badge tag, each at most once."""
    out = (answer or "").strip()
    if PROGRAMME_DOMAIN not in out:
        separator = " " if out.endswith(".") else "\n"
        out += f"{separator}{INFO_SENTENCE}"
    if BADGE_TAG not in out:
        out += f"\n{BADGE_TAG}"
    return out


def apply_badge(answer: str) -> str:
    return append_info_and_badge(answer) if should_append_badge(answer) else answer


def extract_follow_up_question(content: str) -> Tuple[str, Optional[str]]:
    """Split a trailing follow-up question from the answer body.

    Returns:
        ``(main_content, follow_up_question)``; the question always ends with
        ``?`` and is ``None`` when no pattern matches.
    """
    for pattern in _FOLLOW_UP_PATTERNS:
        match = pattern.search(content)
        if match:
            question = match.group(1).strip()
            if not question.endswith("?"):
                question += "?"
            main_content = (content[: match.start()] + content[match.end():]).strip()
            return main_content, question
    return content, None

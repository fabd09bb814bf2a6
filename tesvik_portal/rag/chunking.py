"""Sentence-greedy text chunking for knowledge base ingestion."""

from __future__ import annotations

import re
from typing import List

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+|[^.!?]+$")


def split_sentences(text: str) -> List[str]:
    sentences = [s.strip() for s in _SENTENCE_RE.findall(text) if s.strip()]
    return sentences or [text.strip()]


def chunk_text(text: str, chunk_size: int = 500) -> List[str]:
    """Group consecutive sentences into chunks of at most ``chunk_size`` characters.

    A chunk is closed as soon as the next sentence would overflow it. A single
    sentence longer than ``chunk_size`` becomes a chunk of its own. Empty and
    whitespace-only input yields no chunks.
    """
    if not text or not text.strip():
        return []

    chunks: List[str] = []
    current = ""
    for sentence in split_sentences(text):
        candidate = f"{current} {sentence}" if current else sentence
        if current and len(candidate) > chunk_size:
            chunks.append(current)
            current = sentence
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks

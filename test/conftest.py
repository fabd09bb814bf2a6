from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Sequence

import httpx
import pytest

# Load dotenv files early so test fixtures can read secrets via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except Exception:
    pass

# The application engine is created at import time; point it at SQLite before any import
os.environ["DATABASE__URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE__CREATE_TABLES_ON_STARTUP"] = "false"
os.environ.setdefault("LOGFIRE_ENABLED", "false")

from tesvik_portal.core.text import fold  # noqa: E402


class KeywordEmbedder:
    """Deterministic embedder: one dimension per vocabulary word, counting its occurrences."""

    def __init__(self, vocabulary: Sequence[str]) -> None:
        self.vocabulary = [fold(word) for word in vocabulary]
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        folded = fold(text)
        return [float(folded.count(word)) for word in self.vocabulary]


@pytest.fixture
def embedder_factory():
    """Build a ``KeywordEmbedder`` for a vocabulary."""
    return KeywordEmbedder


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

import httpx

from tesvik_portal.core.errors import ConfigurationError

from .errors import EmbeddingError


class Embedder(Protocol):
    async def embed(self, text: str) -> List[float]: ...


class OpenAIEmbeddingClient:
    """
    Thin async client for the OpenAI embeddings endpoint.

    Used for support-program embeddings, knowledge base chunks and chat
    questions; all three must use the same model and dimensions so that
    cosine similarity between them is meaningful.
    """

    def __init__(
        self,
        base_url: str = "https://api.openai.com/v1",
        *,
        api_key: Optional[str] = None,
        model: str = "text-embedding-3-small",
        dimensions: int = 1536,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.dimensions = dimensions
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("OpenAI API key is not configured")
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    async def embed(self, text: str) -> List[float]:
        """Return the embedding vector of ``text``."""
        headers = self._headers()
        payload = {"model": self.model, "input": text, "dimensions": self.dimensions}
        try:
            self._logger.debug("OpenAIEmbeddingClient.embed: POST %s/embeddings chars=%d", self.base_url, len(text))
            r = await self._client.post(f"{self.base_url}/embeddings", headers=headers, json=payload)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmbeddingError(
                f"Embedding generation failed: {e.response.status_code}",
                upstream_status=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise EmbeddingError(f"Embedding request failed: {e}") from e

        data = r.json()
        try:
            embedding = data["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as e:
            raise EmbeddingError("Unexpected response shape from embeddings API", details=data) from e
        return [float(v) for v in embedding]

    async def aclose(self) -> None:
        await self._client.aclose()

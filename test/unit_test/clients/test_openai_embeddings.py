from __future__ import annotations

import json

import httpx
import pytest

from tesvik_portal.clients.errors import EmbeddingError
from tesvik_portal.clients.openai_embeddings import OpenAIEmbeddingClient
from tesvik_portal.core.errors import ConfigurationError

BASE_URL = "http://mock-openai/v1"


def make_client(handler, api_key="sk-test") -> OpenAIEmbeddingClient:
    return OpenAIEmbeddingClient(
        BASE_URL,
        api_key=api_key,
        dimensions=3,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


async def test_embed_posts_model_and_dimensions():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": [{"embedding": [0.1, 0.2, 0.3]}]})

    assert await make_client(handler).embed("teşvik") == [0.1, 0.2, 0.3]
    assert seen == {
        "path": "/v1/embeddings",
        "auth": "Bearer sk-test",
        "body": {"model": "text-embedding-3-small", "input": "teşvik", "dimensions": 3},
    }


async def test_missing_api_key():
    client = make_client(lambda request: httpx.Response(200, json={}), api_key=None)
    with pytest.raises(ConfigurationError):
        await client.embed("x")


async def test_http_error_status():
    client = make_client(lambda request: httpx.Response(429, text="slow down"))
    with pytest.raises(EmbeddingError) as exc_info:
        await client.embed("x")
    assert exc_info.value.upstream_status == 429
    assert exc_info.value.details == "slow down"


async def test_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmbeddingError):
        await make_client(handler).embed("x")


async def test_unexpected_payload():
    client = make_client(lambda request: httpx.Response(200, json={"data": []}))
    with pytest.raises(EmbeddingError) as exc_info:
        await client.embed("x")
    assert exc_info.value.details == {"data": []}

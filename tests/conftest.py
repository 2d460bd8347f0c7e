"""Shared fixtures: mocked httpx client, canned responses, key-free environment."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest


# ---------------------------------------------------------------------------
# Mock embedding provider
# ---------------------------------------------------------------------------


class MockEmbeddingProvider:
    """Returns fixed-length vectors derived from text length.

    Structurally satisfies the EmbeddingProvider protocol without HTTP.
    """

    id = "mock"
    model = "mock-embed"

    def __init__(self) -> None:
        self.closed = False

    async def embed_query(self, text: str) -> list[float]:
        return [float(len(text)), 1.0, 0.0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [await self.embed_query(t) for t in texts]

    async def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def _response(
    status_code: int = 200,
    json_data: object | None = None,
    text: str | None = None,
) -> httpx.Response:
    """Build a real httpx.Response bound to a POST request."""
    request = httpx.Request("POST", "https://myres.openai.azure.com/openai/deployments/text-embed/embeddings")
    if text is not None:
        return httpx.Response(status_code=status_code, text=text, request=request)
    return httpx.Response(status_code=status_code, json=json_data if json_data is not None else {}, request=request)


@pytest.fixture
def make_response():
    """Factory for httpx.Response objects: make_response(status, json_data=..., text=...)."""
    return _response


@pytest.fixture
def mock_http():
    """Mock httpx.AsyncClient whose .post() returns a 200 with no data by default."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.post.return_value = _response(200, {"data": []})
    return client


@pytest.fixture
def no_env_key(monkeypatch):
    """Make sure a developer's AZURE_OPENAI_API_KEY does not leak into tests."""
    monkeypatch.delenv("AZURE_OPENAI_API_KEY", raising=False)


@pytest.fixture
def mock_provider() -> MockEmbeddingProvider:
    return MockEmbeddingProvider()

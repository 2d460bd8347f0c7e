"""Embedding provider capability shared by all backends."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Anything that turns text into vectors for memory search."""

    id: str
    model: str

    async def embed_query(self, text: str) -> list[float]: ...

    async def embed_batch(self, texts: list[str]) -> list[list[float]]: ...

    async def close(self) -> None: ...

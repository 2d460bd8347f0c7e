"""Pydantic DTOs for embedding provider inputs and resolved clients."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class RemoteOptions(BaseModel):
    """memorySearch.remote overrides. Every field is optional (default None)."""

    api_key: str | None = None
    base_url: str | None = None
    headers: dict[str, str] | None = None


class EmbeddingProviderOptions(BaseModel):
    """Everything needed to build an embedding provider.

    ``config`` and ``agent_dir`` are passed through unexamined to the
    API key lookup.
    """

    provider: str = "azure-openai"
    model: str = ""
    remote: RemoteOptions | None = None
    config: Any = None
    agent_dir: str | Path | None = None


class AzureOpenAiEmbeddingClient(BaseModel):
    """Resolved client descriptor. ``base_url`` is not yet validated."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    headers: dict[str, str]
    model: str


class EmbeddingRequest(BaseModel):
    """JSON body for a single embeddings call."""

    input: list[str]
    model: str | None = None

    def to_payload(self) -> dict[str, Any]:
        # Some deployments reject an empty model field, so leave it out.
        return self.model_dump(exclude_none=True)

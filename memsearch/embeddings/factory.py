"""Build embedding providers by id.

New backends register a creator in ``_CREATORS``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from memsearch.config import Settings
from memsearch.embeddings.azure_openai import (
    PROVIDER_ID as AZURE_OPENAI,
    create_azure_openai_embedding_provider,
)
from memsearch.embeddings.base import EmbeddingProvider
from memsearch.embeddings.schemas import EmbeddingProviderOptions, RemoteOptions

logger = logging.getLogger(__name__)

ProviderCreator = Callable[..., Awaitable[tuple[EmbeddingProvider, Any]]]

_CREATORS: dict[str, ProviderCreator] = {
    AZURE_OPENAI: create_azure_openai_embedding_provider,
}


def options_from_settings(settings: Settings) -> EmbeddingProviderOptions:
    """Map flat settings onto provider options. Blank remote fields count as unset."""
    remote = RemoteOptions(
        api_key=settings.remote_api_key or None,
        base_url=settings.remote_base_url or None,
        headers=dict(settings.remote_headers) or None,
    )
    return EmbeddingProviderOptions(
        provider=settings.embedding_provider,
        model=settings.embedding_model,
        remote=remote,
        config=settings,
        agent_dir=settings.agent_dir,
    )


async def create_embedding_provider(
    options: EmbeddingProviderOptions,
    *,
    http_client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
) -> EmbeddingProvider:
    """Create the provider named by ``options.provider``."""
    creator = _CREATORS.get(options.provider)
    if creator is None:
        known = ", ".join(sorted(_CREATORS))
        raise ValueError(f"Unknown embedding provider: {options.provider!r} (known: {known})")

    provider, _ = await creator(options, http_client=http_client, timeout=timeout)
    logger.debug("Embedding provider ready: %s (model=%s)", provider.id, provider.model or "default")
    return provider

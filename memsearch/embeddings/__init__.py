"""Embeddings module -- text-to-vector backends for memory search.

Public API:
    EmbeddingProvider         - capability protocol (id, model, embed_query, embed_batch)
    create_embedding_provider - build a provider by id
    options_from_settings     - EmbeddingProviderOptions from Settings

Azure OpenAI:
    AzureOpenAiEmbeddingProvider, create_azure_openai_embedding_provider,
    resolve_azure_openai_embedding_client, normalize_azure_embedding_base_url
"""

from memsearch.embeddings.azure_openai import (
    AzureOpenAiEmbeddingProvider,
    assert_has_api_version,
    create_azure_openai_embedding_provider,
    normalize_azure_embedding_base_url,
    resolve_azure_openai_embedding_client,
)
from memsearch.embeddings.base import EmbeddingProvider
from memsearch.embeddings.factory import create_embedding_provider, options_from_settings
from memsearch.embeddings.schemas import (
    AzureOpenAiEmbeddingClient,
    EmbeddingProviderOptions,
    EmbeddingRequest,
    RemoteOptions,
)

__all__ = [
    "EmbeddingProvider",
    "create_embedding_provider",
    "options_from_settings",
    # Azure OpenAI
    "AzureOpenAiEmbeddingProvider",
    "assert_has_api_version",
    "create_azure_openai_embedding_provider",
    "normalize_azure_embedding_base_url",
    "resolve_azure_openai_embedding_client",
    # Schemas
    "AzureOpenAiEmbeddingClient",
    "EmbeddingProviderOptions",
    "EmbeddingRequest",
    "RemoteOptions",
]

"""Generate embeddings via an Azure-hosted OpenAI deployment.

Azure differs from api.openai.com in three ways that callers should not
have to care about:
  - the deployment URL must end in /embeddings and carry ?api-version=...
  - auth is a literal ``api-key`` header, not Bearer
  - model names may arrive prefixed with ``azure-openai/``

Uses httpx.AsyncClient for async HTTP with connection pooling.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

import httpx

from memsearch.auth import require_api_key, resolve_api_key_for_provider
from memsearch.embeddings.schemas import (
    AzureOpenAiEmbeddingClient,
    EmbeddingProviderOptions,
    EmbeddingRequest,
)
from memsearch.errors import (
    BadSchemeError,
    EmbeddingRequestError,
    InvalidBaseUrlError,
    MissingApiVersionError,
    MissingBaseUrlError,
    MissingHostError,
)

logger = logging.getLogger(__name__)

PROVIDER_ID = "azure-openai"
MODEL_PREFIX = f"{PROVIDER_ID}/"
BASE_URL_CONFIG_KEY = "memorySearch.remote.baseUrl"
EXAMPLE_BASE_URL = (
    "https://{resource}.openai.azure.com/openai/deployments/{deployment}"
    "/embeddings?api-version=2023-05-15"
)

_EMBEDDINGS_PATH = re.compile(rb"/embeddings$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# URL validation
# ---------------------------------------------------------------------------


def normalize_azure_embedding_base_url(raw: str) -> httpx.URL:
    """Validate a deployment URL and make sure its path ends in /embeddings.

    Accepts either the deployment root or the full embeddings path.
    The query string is kept as given.
    """
    trimmed = raw.strip()
    if not trimmed:
        raise MissingBaseUrlError(
            f"Azure OpenAI embeddings require {BASE_URL_CONFIG_KEY} (including ?api-version=...)."
        )

    try:
        url = httpx.URL(trimmed)
    except httpx.InvalidURL as e:
        raise InvalidBaseUrlError(
            f'Invalid Azure OpenAI embeddings baseUrl: "{trimmed}". Expected a full https URL.'
        ) from e
    if not url.scheme or (url.port is not None and not 0 <= url.port <= 65535):
        raise InvalidBaseUrlError(
            f'Invalid Azure OpenAI embeddings baseUrl: "{trimmed}". Expected a full https URL.'
        )

    if url.scheme != "https":
        raise BadSchemeError(
            f"Invalid Azure OpenAI embeddings baseUrl protocol: {url.scheme}:. Expected https.",
            scheme=url.scheme,
        )
    if not url.host:
        raise MissingHostError(f'Invalid Azure OpenAI embeddings baseUrl host in: "{trimmed}".')

    # Work on the encoded path so segments like %2F survive the rebuild.
    path = url.raw_path.split(b"?", 1)[0].rstrip(b"/")
    if not _EMBEDDINGS_PATH.search(path):
        path += b"/embeddings"
    if url.query:
        path += b"?" + url.query
    return url.copy_with(raw_path=path)


def assert_has_api_version(url: httpx.URL) -> None:
    """Azure rejects requests without an api-version query parameter."""
    if "api-version" not in url.params:
        raise MissingApiVersionError(
            " ".join(
                [
                    "Azure OpenAI embeddings baseUrl is missing required query parameter api-version.",
                    f"Set {BASE_URL_CONFIG_KEY} to include it, for example:",
                    EXAMPLE_BASE_URL,
                ]
            )
        )


# ---------------------------------------------------------------------------
# Client resolution
# ---------------------------------------------------------------------------


def normalize_model(raw: str) -> str:
    """Strip whitespace and the ``azure-openai/`` prefix. Empty stays empty."""
    trimmed = raw.strip()
    if trimmed.startswith(MODEL_PREFIX):
        return trimmed[len(MODEL_PREFIX):]
    return trimmed


def merge_headers(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings left to right. Later sources win on equal keys.

    Keys are compared exactly as given, without case folding.
    """
    merged: dict[str, str] = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            merged[key] = value
    return merged


async def resolve_azure_openai_embedding_client(
    options: EmbeddingProviderOptions,
) -> AzureOpenAiEmbeddingClient:
    """Work out base URL, headers and model from remote overrides + key lookup."""
    remote = options.remote
    remote_api_key = (remote.api_key or "").strip() if remote is not None else ""
    remote_base_url = (remote.base_url or "").strip() if remote is not None else ""
    header_overrides = remote.headers if remote is not None else None

    if remote_api_key:
        api_key = remote_api_key
    else:
        api_key = require_api_key(
            await resolve_api_key_for_provider(
                PROVIDER_ID,
                cfg=options.config,
                agent_dir=options.agent_dir,
            ),
            PROVIDER_ID,
        )

    if not remote_base_url:
        raise MissingBaseUrlError(
            " ".join(
                [
                    f"Azure OpenAI embeddings require {BASE_URL_CONFIG_KEY}.",
                    "Expected an Azure deployments embeddings URL including api-version, for example:",
                    EXAMPLE_BASE_URL,
                ]
            )
        )

    headers = merge_headers(
        {
            "Content-Type": "application/json",
            "api-key": api_key,
        },
        header_overrides,
    )

    return AzureOpenAiEmbeddingClient(
        base_url=remote_base_url,
        headers=headers,
        model=normalize_model(options.model),
    )


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


def _parse_embeddings(payload: Any) -> list[list[float]]:
    """Map ``data`` entries to vectors by position.

    Missing or malformed entries become empty vectors so alignment with
    the request inputs is never shifted.
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        return []
    vectors: list[list[float]] = []
    for entry in data:
        embedding = entry.get("embedding") if isinstance(entry, dict) else None
        vectors.append(list(embedding) if isinstance(embedding, list) else [])
    return vectors


class AzureOpenAiEmbeddingProvider:
    """Async embedding generation against a validated Azure deployment URL."""

    id = PROVIDER_ID

    def __init__(
        self,
        client: AzureOpenAiEmbeddingClient,
        url: httpx.URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.client = client
        self.url = url
        self.model = client.model
        self._headers = dict(client.headers)
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed all texts in one request. Returns vectors in input order."""
        if not texts:
            return []

        request = EmbeddingRequest(input=list(texts), model=self.model or None)
        logger.debug("Embedding %d text(s) via %s", len(texts), self.url.host)
        response = await self._http.post(
            str(self.url),
            headers=self._headers,
            json=request.to_payload(),
        )
        if not response.is_success:
            raise EmbeddingRequestError("azure openai", response.status_code, response.text)
        return _parse_embeddings(response.json())

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single text. Empty vector if the response had no entries."""
        vectors = await self.embed_batch([text])
        return vectors[0] if vectors else []

    async def close(self) -> None:
        """Close the underlying httpx client if this provider created it."""
        if self._owns_http:
            await self._http.aclose()


async def create_azure_openai_embedding_provider(
    options: EmbeddingProviderOptions,
    *,
    http_client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
) -> tuple[AzureOpenAiEmbeddingProvider, AzureOpenAiEmbeddingClient]:
    """Resolve config, validate the URL and build the provider.

    Any configuration error aborts before a provider exists.
    """
    client = await resolve_azure_openai_embedding_client(options)
    url = normalize_azure_embedding_base_url(client.base_url)
    assert_has_api_version(url)

    logger.debug(
        "Created %s embedding provider (host=%s, model=%s)",
        PROVIDER_ID,
        url.host,
        client.model or "<deployment default>",
    )
    provider = AzureOpenAiEmbeddingProvider(client, url, http_client=http_client, timeout=timeout)
    return provider, client

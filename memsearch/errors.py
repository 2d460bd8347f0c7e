"""Error types raised by embedding providers.

Configuration failures form a closed set: each subclass carries a ``kind``
so callers can branch on the variant without matching message text.
Request failures carry the HTTP status and raw response body.
"""

from __future__ import annotations

from typing import Literal

EmbeddingConfigErrorKind = Literal[
    "missing_base_url",
    "invalid_url",
    "bad_scheme",
    "missing_host",
    "missing_api_version",
    "missing_api_key",
]


class EmbeddingConfigError(ValueError):
    """Provider could not be built from the given configuration."""

    kind: EmbeddingConfigErrorKind


class MissingBaseUrlError(EmbeddingConfigError):
    kind = "missing_base_url"


class InvalidBaseUrlError(EmbeddingConfigError):
    kind = "invalid_url"


class BadSchemeError(EmbeddingConfigError):
    kind = "bad_scheme"

    def __init__(self, message: str, scheme: str) -> None:
        super().__init__(message)
        self.scheme = scheme


class MissingHostError(EmbeddingConfigError):
    kind = "missing_host"


class MissingApiVersionError(EmbeddingConfigError):
    kind = "missing_api_version"


class MissingApiKeyError(EmbeddingConfigError):
    kind = "missing_api_key"

    def __init__(self, message: str, provider: str) -> None:
        super().__init__(message)
        self.provider = provider


class EmbeddingRequestError(RuntimeError):
    """Embedding endpoint answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, body: str) -> None:
        super().__init__(f"{provider} embeddings failed: {status_code} {body}")
        self.provider = provider
        self.status_code = status_code
        self.body = body

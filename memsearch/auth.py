"""API key lookup shared by all embedding providers.

Sources are checked in order and the first non-blank value wins:
  settings field -> environment variable -> <agent_dir>/auth.json
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from memsearch.errors import MissingApiKeyError

logger = logging.getLogger(__name__)

AUTH_FILE_NAME = "auth.json"

# provider id -> (Settings attribute, environment variable)
_PROVIDER_KEY_SOURCES: dict[str, tuple[str, str]] = {
    "azure-openai": ("azure_openai_api_key", "AZURE_OPENAI_API_KEY"),
}


def _clean(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _read_auth_file(provider: str, agent_dir: str | Path) -> str | None:
    path = Path(agent_dir) / AUTH_FILE_NAME
    if not path.is_file():
        return None
    try:
        profiles = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise MissingApiKeyError(
            f"Could not read API keys from {path}: {e}", provider
        ) from e
    if not isinstance(profiles, dict):
        return None
    entry = profiles.get(provider)
    if isinstance(entry, dict):
        return _clean(entry.get("api_key"))
    return None


async def resolve_api_key_for_provider(
    provider: str,
    cfg: Any = None,
    agent_dir: str | Path | None = None,
) -> str | None:
    """Find an API key for ``provider``. Returns None if no source has one."""
    attr, env_var = _PROVIDER_KEY_SOURCES.get(provider, ("", ""))

    if cfg is not None and attr:
        key = _clean(getattr(cfg, attr, None))
        if key:
            logger.debug("Using %s API key from settings", provider)
            return key

    if env_var:
        key = _clean(os.environ.get(env_var))
        if key:
            logger.debug("Using %s API key from %s", provider, env_var)
            return key

    if agent_dir is not None:
        key = _read_auth_file(provider, agent_dir)
        if key:
            logger.debug("Using %s API key from %s", provider, AUTH_FILE_NAME)
            return key

    return None


def require_api_key(key: str | None, provider: str) -> str:
    """Return the stripped key or raise MissingApiKeyError."""
    cleaned = _clean(key)
    if cleaned is None:
        _, env_var = _PROVIDER_KEY_SOURCES.get(provider, ("", ""))
        hint = f" Set {env_var} or add it to {AUTH_FILE_NAME} in the agent dir." if env_var else ""
        raise MissingApiKeyError(f'No API key found for provider "{provider}".{hint}', provider)
    return cleaned

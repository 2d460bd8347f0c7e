"""Settings via pydantic-settings with MEMSEARCH_ env prefix.

The Azure credential uses validation_alias to read the unprefixed
AZURE_OPENAI_API_KEY that the Azure tooling already exports, so one .env
file serves both.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MEMSEARCH_", env_file=".env")

    # Embeddings
    embedding_provider: str = "azure-openai"
    embedding_model: str = ""  # empty lets the deployment pick
    embedding_timeout: float = 30.0  # seconds, only for self-owned http clients

    # memorySearch.remote overrides
    remote_base_url: str = ""
    remote_api_key: str = ""
    remote_headers: dict[str, str] = {}  # JSON object in env

    # Credential fallback
    azure_openai_api_key: str = Field("", validation_alias="AZURE_OPENAI_API_KEY")
    agent_dir: str | None = None

    log_level: str = "info"

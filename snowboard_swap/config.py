"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a SNOWBOARD_SWAP_* environment variable
    - get_settings() is cached (lru_cache): single instance per process
    - api_base_url never ends with '/'
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SNOWBOARD_SWAP_", case_sensitive=False,
    )

    # REST API
    api_base_url: str = "http://localhost:8080/api"
    api_timeout_seconds: float = 30.0

    @field_validator("api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    # Token persistence
    token_storage_key: str = "codex01.jwt.token"
    token_file: Path = Path.home() / ".snowboard_swap" / "token.json"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

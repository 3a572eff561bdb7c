"""
Application settings.

Values come from the environment (or a local ``.env`` file); names are
case-insensitive, so ``RIDB_API_KEY`` populates ``ridb_api_key``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid."""


class Settings(BaseSettings):
    """Runtime configuration for campvue."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "campvue"
    app_env: str = "dev"  # dev|prod
    debug: bool = False
    log_level: str = "INFO"

    # --- RIDB (Recreation Information Database) ---
    ridb_api_key: str | None = None
    ridb_base_url: str = "https://ridb.recreation.gov/api/v1"
    request_timeout_s: float = Field(default=12.0, gt=0)

    def require_api_key(self) -> str:
        """Return the RIDB API key, or raise if it is not configured."""
        if not self.ridb_api_key:
            msg = "Server misconfigured: missing RIDB_API_KEY"
            raise ConfigurationError(msg)
        return self.ridb_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (loaded once)."""
    return Settings()

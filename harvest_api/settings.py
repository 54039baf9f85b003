"""Client settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.harvestapp.com/v2/"


class Settings(BaseSettings):
    """Settings for the Harvest API client."""

    model_config = SettingsConfigDict(
        env_prefix="HARVEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    access_token: str | None = None
    account_id: str | None = None
    user_agent: str | None = None
    base_url: str = DEFAULT_BASE_URL


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

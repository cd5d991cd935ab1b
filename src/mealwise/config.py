"""
Mealwise - Configuration and settings.

Settings are read from the environment (and .env) on first use, so importing
the package never requires credentials.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str

    # Application
    mealwise_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # MEALWISE_LOG_PROMPTS=1 - log every LLM call to prompt_logs/ (dev only)
    mealwise_log_prompts: bool = False

    # Value written into requested slots the model left empty
    plan_placeholder: str = "TBD"

    @property
    def is_development(self) -> bool:
        return self.mealwise_env == "development"

    @property
    def is_production(self) -> bool:
        return self.mealwise_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()

"""
Application configuration.

Settings are loaded from environment variables with sensible defaults and
only feed the HTTP app and the demo. The translation engine itself never
reads them: every translation receives an explicit, immutable
TranslatorConfig, so concurrent translations with different services
can't interfere with each other.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ==========================================================================
    # Translation service
    # ==========================================================================

    translation_base_address: str = "http://localhost:5000/api/translate"
    translation_api_version: str = "application/json"
    translation_retry_attempts: int = 1
    translation_retry_backoff: float = 0.5

    # Default filters, comma-separated address patterns
    translate_properties: str = ""
    ignore_properties: str = ""

    # Directory of YAML filter profiles (optional)
    filter_profiles_dir: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def translate_properties_list(self) -> list[str]:
        return _split(self.translate_properties)

    @property
    def ignore_properties_list(self) -> list[str]:
        return _split(self.ignore_properties)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class TranslatorConfig(BaseModel):
    """Where and how to reach the translation service, for one translation."""

    model_config = ConfigDict(frozen=True)

    base_address: str
    api_version: str = "application/json"

    # Attempts per request; transport failures are retried with exponential backoff
    retry_attempts: int = 1
    retry_backoff: float = 0.5

    @property
    def headers(self) -> dict[str, str]:
        return {"Accept": self.api_version}

    @classmethod
    def from_settings(cls, settings: Settings) -> TranslatorConfig:
        return cls(
            base_address=settings.translation_base_address,
            api_version=settings.translation_api_version,
            retry_attempts=settings.translation_retry_attempts,
            retry_backoff=settings.translation_retry_backoff,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

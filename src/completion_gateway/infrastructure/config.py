"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: Literal["gemini", "openai"] = "gemini"
    gemini_api_key: SecretStr | None = None
    gemini_model: str = "gemini-2.5-flash"
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    upload_dir: Path = Path("uploads")
    request_timeout_seconds: float | None = None
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @model_validator(mode="after")
    def _provider_needs_key(self) -> Settings:
        key = self.gemini_api_key if self.provider == "gemini" else self.openai_api_key
        if key is None or not key.get_secret_value():
            msg = f"{self.provider.upper()}_API_KEY must be set when provider is '{self.provider}'."
            raise ValueError(msg)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()

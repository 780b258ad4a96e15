"""Runtime settings, read from the environment."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ORGREACT_", env_file=".env", extra="ignore", populate_by_name=True
    )

    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ORGREACT_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = "gemini-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    seed_file: Optional[Path] = None
    max_retries: int = 3
    retry_delay: float = 1.0  # seconds, multiplied by the retry number
    request_timeout: float = 30.0
    log_level: str = "WARNING"


def get_settings() -> Settings:
    return Settings()

"""Application settings using Pydantic."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Identity matching
    match_threshold: float = Field(default=0.85, ge=0.0, le=1.0)

    # Transcript scanning
    speaker_max_length: int = Field(default=20, ge=1)

    # Topic table
    default_year: int = 2025
    topic_placeholder: str = "無資料"

    # Optional JSON file overriding the built-in pattern tables
    patterns_file: Optional[Path] = None

    # Uploads
    max_upload_bytes: int = 50 * 1024 * 1024

    # Logging
    log_level: str = "INFO"
    log_json: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings so the few tunables of the store can be set without
code changes:

  EDCERT_COMPRESSION_PRESET=9
  EDCERT_LOG_LEVEL=DEBUG

Settings are only read when a caller constructs StoreSettings (usually via
bootstrap.create_store); the codec and store never consult the environment
themselves. The compression preset affects size and speed only: any preset
produces blobs every reader can decode.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edcert_store.codec import DEFAULT_COMPRESSION_LEVEL

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class StoreSettings(BaseSettings):
    """
    Store settings.

    Load order (highest priority first):
      1. Environment variables (EDCERT_ prefix)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="EDCERT_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    compression_preset: int = Field(
        default=DEFAULT_COMPRESSION_LEVEL,
        ge=0,
        le=9,
        description="XZ preset used when encoding certificates (0 fastest, 9 smallest)",
    )
    log_level: str = Field(default="INFO", description="structlog filtering level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject names the logging module doesn't know."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level

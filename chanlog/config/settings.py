"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """chanlog configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Factory
    config_file: str | None = Field(default=None, alias="CHANLOG_CONFIG_FILE")
    root_path: str | None = Field(default=None, alias="CHANLOG_ROOT_PATH")
    default_channel: str | None = Field(default=None, alias="CHANLOG_DEFAULT_CHANNEL")
    strict: bool = Field(default=False, alias="CHANLOG_STRICT")

    # Internal diagnostics
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(default="console", alias="LOG_FORMAT")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

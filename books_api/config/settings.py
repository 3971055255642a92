"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Levels both structlog and uvicorn understand.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class Settings(BaseSettings):
    """Runtime settings for the HTTP server and logging."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "books-api"
    environment: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=4000, ge=1, le=65535)
    log_level: str = "INFO"
    log_format: Literal["json", "logfmt"] = "json"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept any case and the WARN/FATAL aliases, reject other names."""
        level = value.upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def bind_address(self) -> str:
        return f"{self.api_host}:{self.api_port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return singleton settings instance."""
    return Settings()

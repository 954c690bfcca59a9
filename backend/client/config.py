"""
Client SDK configuration.

Loaded from TRAK_* environment variables (or .env).
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for talking to a Trak API."""

    model_config = SettingsConfigDict(
        env_prefix="TRAK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = "http://localhost:8000"
    stale_time_seconds: float = 60.0
    request_timeout_seconds: float = 10.0
    hint_file: Optional[Path] = None


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()

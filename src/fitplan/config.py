"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    catalog_path: Path | None = None
    image_cache_dir: Path = Path.home() / ".cache" / "fitplan" / "images"
    image_cache_count_limit: int = 100
    image_cache_total_cost_limit: int = 100 * 1024 * 1024
    image_fetch_timeout_seconds: float = 15.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FITPLAN_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

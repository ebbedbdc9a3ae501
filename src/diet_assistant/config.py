"""Application configuration."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_assistant.services.catalog import ResolutionMode

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    resolution_mode: ResolutionMode = ResolutionMode.SINGLE_PASS
    profile_history_limit: int = Field(default=20, ge=1)
    seed_sample_foods: bool = True
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_queries: str | None = None
    refresh_catalog_on_start: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="DIET_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_queries(raw: str | None) -> list[str]:
    """Parse comma-separated FDC search queries from env."""
    if raw is None:
        return []
    queries: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in queries:
            queries.append(value)
    return queries

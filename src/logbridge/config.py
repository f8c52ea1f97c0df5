"""Configuration via pydantic-settings — 12-factor app style."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Logbridge configuration — loaded from env vars / .env file."""

    default_level: str = Field(default="info", description="Level returned when no filter matches")
    filters_file: str | None = Field(default=None, description="JSON file holding filter definitions")
    active_filters: list[str] | None = Field(
        default=None, description="Names of the filters to compile (all when unset)"
    )
    discover_status_types: bool = Field(
        default=False, description="Load extra status types from the 'logbridge.status_types' entry-points"
    )

    class Config:
        env_prefix = "LOGBRIDGE_"
        env_file = ".env"


settings = Settings()

"""Lightweight configuration for the tracker tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    data_dir: Path = Field(default=Path("games"), description="Where game snapshots live")
    catalog_path: Path = Field(
        default=Path("cities.json"),
        description="Location catalog used when starting a new game",
    )
    shock_markers: int = Field(
        default=5,
        description="Shock (epidemic) markers shuffled into the city deck",
        ge=0,
    )
    infection_rate: int = Field(default=2, description="Starting infection rate", ge=1)
    host: str = Field(default="127.0.0.1", description="Host interface for the HTTP API")
    port: int = Field(default=8000, description="TCP port for the HTTP API")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings

from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]


def env_file_config(name: str) -> SettingsConfigDict:
    """Read ``env/<name>`` when it exists; real environment variables win."""
    env_file = ROOT / "env" / name
    return SettingsConfigDict(
        env_file=str(env_file) if env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(BaseSettings):
    """Fields every environment exposes. DATABASE_URL is declared per mode."""

    APP_ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    # JSON list or comma-separated origins; empty means the development defaults
    CORS_ORIGINS: str = ""

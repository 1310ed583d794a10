from __future__ import annotations

from config.base import AppSettings, env_file_config


class ProdSettings(AppSettings):
    # No default: production must be pointed at its database explicitly
    DATABASE_URL: str
    APP_ENV: str = "production"

    model_config = env_file_config(".env.production")

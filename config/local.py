from __future__ import annotations

from config.base import ROOT, AppSettings, env_file_config


class LocalSettings(AppSettings):
    # SQLite keeps a fresh checkout runnable without a Postgres server
    DATABASE_URL: str = f"sqlite+aiosqlite:///{ROOT / 'stock_opname.db'}"
    APP_ENV: str = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"

    model_config = env_file_config(".env.local")

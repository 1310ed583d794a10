from __future__ import annotations

from config.base import ROOT, AppSettings, env_file_config


class TestSettings(AppSettings):
    """Settings used by the pytest suite; tests swap the session dependency anyway."""

    __test__ = False

    DATABASE_URL: str = f"sqlite+aiosqlite:///{ROOT / 'test_stock_opname.db'}"
    APP_ENV: str = "test"
    LOG_LEVEL: str = "WARNING"

    model_config = env_file_config(".env.test")

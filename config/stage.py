from __future__ import annotations

from config.base import AppSettings, env_file_config
from config.database import get_database_url


class StageSettings(AppSettings):
    APP_ENV: str = "stage"

    # Database components
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "stock_opname"

    model_config = env_file_config(".env.staging")

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL from components"""
        return get_database_url(
            driver=self.DB_DRIVER,
            host=self.DB_HOST,
            port=self.DB_PORT,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
            name=self.DB_NAME,
        )

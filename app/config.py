"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Application
    APP_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Database: DATABASE_URL, если задан, имеет приоритет над DB_*
    DATABASE_URL: str = ""
    DB_HOST: str = ""
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""  # ВАЖНО: только из окружения, не в файлах
    DB_NAME: str = "subscriptions"
    DB_SSLMODE: str = "disable"

    # Pool
    DB_MAX_CONNS: int = 5
    DB_MIN_CONNS: int = 1

    # Server-side statement timeout, 0 = без ограничения
    DB_STATEMENT_TIMEOUT_MS: int = 0

    # Migrations
    MIGRATION_PATH: str = "migrations"
    RUN_MIGRATIONS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Игнорировать дополнительные поля из переменных окружения
    )

    def check_database_settings(self) -> None:
        """
        Проверить что хватает параметров для подключения к БД

        Raises:
            ValueError: DB_HOST / DB_PASSWORD не заданы (и нет DATABASE_URL)
        """
        if self.DATABASE_URL:
            return
        if not self.DB_HOST:
            raise ValueError("DB_HOST is required")
        if not self.DB_PASSWORD:
            raise ValueError("DB_PASSWORD is required")

    def get_sqlalchemy_url(self) -> str:
        """
        SQLAlchemy URL (postgresql+psycopg://)

        DATABASE_URL используется как есть (с заменой драйвера),
        иначе URL собирается из DB_* параметров.
        """
        url = self.DATABASE_URL
        if url:
            if url.startswith("postgresql://"):
                return url.replace("postgresql://", "postgresql+psycopg://", 1)
            return url

        self.check_database_settings()
        return (
            f"postgresql+psycopg://{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASSWORD)}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?sslmode={self.DB_SSLMODE}"
        )


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()

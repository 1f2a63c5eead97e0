"""
Programmatic Alembic upgrade (вызывается при старте приложения)
"""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from app.config import get_settings

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def build_alembic_config() -> Config:
    """
    Alembic Config без alembic.ini-зависимостей от cwd

    MIGRATION_PATH относительный -> от корня проекта.
    """
    settings = get_settings()

    script_location = Path(settings.MIGRATION_PATH)
    if not script_location.is_absolute():
        script_location = _PROJECT_ROOT / script_location

    cfg = Config(str(_PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(script_location))
    # configparser интерполирует '%'
    cfg.set_main_option("sqlalchemy.url", settings.get_sqlalchemy_url().replace("%", "%%"))
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(revision: str = "head") -> None:
    cfg = build_alembic_config()
    logger.info("Applying database migrations from %s", cfg.get_main_option("script_location"))
    command.upgrade(cfg, revision)
    logger.info("Database migrations applied")

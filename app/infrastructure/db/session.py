"""
Database session management (SQLAlchemy)
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from app.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.get_sqlalchemy_url()

        connect_args = {}
        if settings.DB_STATEMENT_TIMEOUT_MS > 0:
            # Запрос, брошенный клиентом, не будет висеть на сервере бесконечно
            connect_args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"

        _engine = create_engine(
            url,
            pool_pre_ping=True,
            pool_size=settings.DB_MIN_CONNS,
            max_overflow=max(settings.DB_MAX_CONNS - settings.DB_MIN_CONNS, 0),
            pool_recycle=3600,
            connect_args=connect_args,
        )
    return _engine


def get_session_factory():
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Session:
    """
    Dependency для FastAPI - создает session и автоматически закрывает

    Usage:
        @app.get("/subscriptions")
        def list_subscriptions(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Health check - проверка доступности PostgreSQL

    Raises:
        sqlalchemy.exc.OperationalError: если БД недоступна
    """
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))

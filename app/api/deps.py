"""
FastAPI dependencies (DB session, repositories, validator)
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.domain.repository import SubscriptionRepository
from app.infrastructure.db.session import get_db as _get_db
from app.infrastructure.subscriptions.repository import SqlSubscriptionRepository
from app.utils.validation import get_validator  # noqa: F401 (re-export)


# Re-export get_db для удобства
get_db = _get_db


def get_subscription_repository(db: Session = Depends(get_db)) -> SubscriptionRepository:
    """
    Repository на сессию запроса

    Usage в тестах:
        app.dependency_overrides[get_subscription_repository] = lambda: fake_repo
    """
    return SqlSubscriptionRepository(db)

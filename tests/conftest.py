"""
Pytest fixtures for testing
"""
import itertools
from dataclasses import replace
from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.domain.errors import NotFound
from app.domain.filters import SubscriptionFilter, SummaryFilter, sum_prices
from app.domain.repository import SubscriptionRepository
from app.domain.subscription import Subscription
from app.infrastructure.db.session import Base
from app.infrastructure.db import models  # noqa: F401 (регистрирует таблицы)
from app.infrastructure.subscriptions.repository import SqlSubscriptionRepository


class InMemorySubscriptionRepository(SubscriptionRepository):
    """
    Fake repository: хранит записи в dict и запоминает все вызовы

    calls - список (operation, args) для проверки что storage НЕ вызывался.
    """

    def __init__(self):
        self.items: dict[UUID, Subscription] = {}
        self.calls: list[tuple[str, tuple]] = []
        self._clock = itertools.count()
        self._epoch = datetime(2026, 1, 1)

    def _now(self) -> datetime:
        # Монотонное время: порядок создания однозначен
        return self._epoch + timedelta(seconds=next(self._clock))

    def create(self, sub):
        self.calls.append(("create", (sub,)))
        now = self._now()
        created = replace(sub, id=uuid4(), created_at=now, updated_at=now)
        self.items[created.id] = created
        return replace(created)

    def get_by_id(self, sub_id):
        self.calls.append(("get_by_id", (sub_id,)))
        if sub_id not in self.items:
            raise NotFound()
        return replace(self.items[sub_id])

    def update(self, sub):
        self.calls.append(("update", (sub,)))
        current = self.items.get(sub.id)
        if current is None:
            raise NotFound()
        updated = replace(
            current,
            service_name=sub.service_name,
            price=sub.price,
            start_date=sub.start_date,
            end_date=sub.end_date,
            updated_at=self._now(),
        )
        self.items[sub.id] = updated
        return replace(updated)

    def delete(self, sub_id):
        self.calls.append(("delete", (sub_id,)))
        if self.items.pop(sub_id, None) is None:
            raise NotFound()

    def list(self, subscription_filter: SubscriptionFilter):
        self.calls.append(("list", (subscription_filter,)))
        matching = [s for s in self.items.values() if subscription_filter.matches(s)]
        matching.sort(key=lambda s: s.created_at, reverse=True)
        start = subscription_filter.offset
        return matching[start:start + subscription_filter.limit]

    def aggregate(self, summary_filter: SummaryFilter):
        self.calls.append(("aggregate", (summary_filter,)))
        return sum_prices(self.items.values(), summary_filter)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine, одна connection на все потоки (TestClient)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sql_repo(db_session) -> SqlSubscriptionRepository:
    return SqlSubscriptionRepository(db_session)


@pytest.fixture
def fake_repo() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    return uuid4()

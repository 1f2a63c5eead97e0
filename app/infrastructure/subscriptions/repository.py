"""
Subscription Repository - SQLAlchemy реализация SubscriptionRepository

Каждая операция = один запрос к БД.
Ошибки драйвера не уходят наружу: логируются и превращаются в StorageError.
"""
import logging
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import NotFound, StorageError
from app.domain.filters import SubscriptionFilter, SummaryFilter
from app.domain.repository import SubscriptionRepository
from app.domain.subscription import Subscription
from app.infrastructure.db.models import SubscriptionModel, utcnow

logger = logging.getLogger(__name__)

_table = SubscriptionModel.__table__


def _to_domain(row) -> Subscription:
    """ORM объект или Row -> domain Subscription"""
    return Subscription(
        id=row.id,
        user_id=row.user_id,
        service_name=row.service_name,
        price=row.price,
        start_date=row.start_date,
        end_date=row.end_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _identity_criteria(user_id: UUID | None, service_name: str | None) -> list:
    criteria = []
    if user_id is not None:
        criteria.append(_table.c.user_id == user_id)
    if service_name is not None:
        criteria.append(_table.c.service_name == service_name)
    return criteria


class SqlSubscriptionRepository(SubscriptionRepository):
    """
    Repository для таблицы subscriptions

    Usage:
        repo = SqlSubscriptionRepository(db)
        sub = repo.create(Subscription(...))
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, operation: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Storage failure during %s", operation)
            raise StorageError() from exc

    def create(self, sub: Subscription) -> Subscription:
        logger.info("Creating subscription for user %s", sub.user_id)

        with self._storage_errors("create"):
            model = SubscriptionModel(
                user_id=sub.user_id,
                service_name=sub.service_name,
                price=sub.price,
                start_date=sub.start_date,
                end_date=sub.end_date,
            )
            self.db.add(model)
            self.db.flush()  # Получить id и timestamps без commit
            created = _to_domain(model)
            self.db.commit()

        logger.info("Subscription %s created", created.id)
        return created

    def get_by_id(self, sub_id: UUID) -> Subscription:
        with self._storage_errors("get"):
            row = self.db.execute(
                select(_table).where(_table.c.id == sub_id)
            ).first()

        if row is None:
            logger.warning("Subscription %s not found", sub_id)
            raise NotFound()
        return _to_domain(row)

    def update(self, sub: Subscription) -> Subscription:
        logger.info("Updating subscription %s", sub.id)

        with self._storage_errors("update"):
            row = self.db.execute(
                update(_table)
                .where(_table.c.id == sub.id)
                .values(
                    service_name=sub.service_name,
                    price=sub.price,
                    start_date=sub.start_date,
                    end_date=sub.end_date,
                    updated_at=utcnow(),
                )
                .returning(*_table.c)
            ).first()
            self.db.commit()

        # 0 строк: записи нет (или её уже удалили параллельно)
        if row is None:
            logger.warning("Subscription %s not found for update", sub.id)
            raise NotFound()
        return _to_domain(row)

    def delete(self, sub_id: UUID) -> None:
        logger.info("Deleting subscription %s", sub_id)

        with self._storage_errors("delete"):
            result = self.db.execute(delete(_table).where(_table.c.id == sub_id))
            self.db.commit()

        if result.rowcount == 0:
            logger.warning("Subscription %s not found for delete", sub_id)
            raise NotFound()

    def list(self, subscription_filter: SubscriptionFilter) -> list[Subscription]:
        query = (
            select(_table)
            .where(*_identity_criteria(subscription_filter.user_id, subscription_filter.service_name))
            .order_by(_table.c.created_at.desc())
            .limit(subscription_filter.limit)
            .offset(subscription_filter.offset)
        )

        with self._storage_errors("list"):
            rows = self.db.execute(query).all()

        return [_to_domain(r) for r in rows]

    def aggregate(self, summary_filter: SummaryFilter) -> int:
        # Пересечение интервалов: start <= to AND (end IS NULL OR end >= from)
        query = select(func.coalesce(func.sum(_table.c.price), 0)).where(
            *_identity_criteria(summary_filter.user_id, summary_filter.service_name),
            _table.c.start_date <= summary_filter.period_to,
            or_(
                _table.c.end_date.is_(None),
                _table.c.end_date >= summary_filter.period_from,
            ),
        )

        with self._storage_errors("aggregate"):
            total = int(self.db.execute(query).scalar_one())

        logger.info("Aggregated cost = %d", total)
        return total

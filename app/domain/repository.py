"""
Subscription repository contract

Одна production-реализация (SqlSubscriptionRepository),
в тестах - in-memory fake.
"""
from abc import ABC, abstractmethod
from uuid import UUID

from app.domain.filters import SubscriptionFilter, SummaryFilter
from app.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Storage operations for subscriptions

    Any lookup by id that finds no row raises NotFound.
    Every other failure raises StorageError and is not retried here.
    """

    @abstractmethod
    def create(self, sub: Subscription) -> Subscription:
        """Persist a new record; returns it with id and timestamps assigned"""

    @abstractmethod
    def get_by_id(self, sub_id: UUID) -> Subscription:
        pass

    @abstractmethod
    def update(self, sub: Subscription) -> Subscription:
        """
        Overwrite service_name, price, start_date, end_date and refresh updated_at

        Zero affected rows (e.g. deleted concurrently) raises NotFound.
        """

    @abstractmethod
    def delete(self, sub_id: UUID) -> None:
        pass

    @abstractmethod
    def list(self, subscription_filter: SubscriptionFilter) -> list[Subscription]:
        """Newest created_at first, limit/offset applied"""

    @abstractmethod
    def aggregate(self, summary_filter: SummaryFilter) -> int:
        """Sum of price over matching records that overlap the period"""

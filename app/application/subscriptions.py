"""
Subscription use cases — CRUD подписок + суммарная стоимость за период.

Бизнес-правила проверяются до обращения к репозиторию:
невалидный запрос никогда не доходит до storage.
"""
import logging
from uuid import UUID

from app.domain.errors import InvalidIdentifier, SubscriptionError
from app.domain.filters import SubscriptionFilter, SummaryFilter, check_period, normalize_pagination
from app.domain.repository import SubscriptionRepository
from app.domain.subscription import Subscription, check_business_rules

logger = logging.getLogger(__name__)


class CreateSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub: Subscription) -> Subscription:
        logger.info("Create subscription for user %s", sub.user_id)

        try:
            check_business_rules(sub)
        except SubscriptionError as e:
            logger.error("Create rejected: %s", e)
            raise

        created = self.repo.create(sub)
        logger.info("Subscription created: %s", created.id)
        return created


class GetSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub_id: UUID) -> Subscription:
        logger.info("Get subscription %s", sub_id)
        return self.repo.get_by_id(sub_id)


class UpdateSubscriptionUseCase:
    """
    Полная перезапись изменяемых полей (service_name, price, start_date, end_date)

    id неизменяем; user_id и created_at остаются как были в storage.
    """

    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub: Subscription) -> Subscription:
        logger.info("Update subscription %s", sub.id)

        if sub.id is None:
            raise InvalidIdentifier("id is required for update")

        try:
            check_business_rules(sub)
        except SubscriptionError as e:
            logger.error("Update rejected: %s", e)
            raise

        updated = self.repo.update(sub)
        logger.info("Subscription updated: %s", sub.id)
        return updated


class DeleteSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub_id: UUID) -> None:
        logger.info("Delete subscription %s", sub_id)
        self.repo.delete(sub_id)
        logger.info("Subscription deleted: %s", sub_id)


class ListSubscriptionsUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, subscription_filter: SubscriptionFilter) -> list[Subscription]:
        # Фильтр мог быть собран в обход build_list_filter - нормализуем ещё раз
        limit, offset = normalize_pagination(subscription_filter.limit, subscription_filter.offset)
        normalized = SubscriptionFilter(
            user_id=subscription_filter.user_id,
            service_name=subscription_filter.service_name,
            limit=limit,
            offset=offset,
        )

        logger.info("List subscriptions (limit=%d, offset=%d)", limit, offset)
        return self.repo.list(normalized)


class SummarizeSubscriptionsUseCase:
    """
    Суммарная стоимость подписок, активных в периоде [from, to]

    from > to -> InvalidPeriod, storage не вызывается.
    """

    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, summary_filter: SummaryFilter) -> int:
        logger.info(
            "Summarize subscriptions %s..%s",
            summary_filter.period_from, summary_filter.period_to,
        )

        try:
            check_period(summary_filter.period_from, summary_filter.period_to)
        except SubscriptionError as e:
            logger.error("Summary rejected: %s", e)
            raise

        total = self.repo.aggregate(summary_filter)
        logger.info("Summary result = %d", total)
        return total

"""
List / summary filters, pagination defaults and the aggregation engine.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable
from uuid import UUID

from app.domain.errors import InvalidIdentifier, InvalidPeriod
from app.domain.subscription import Subscription

DEFAULT_LIMIT = 20

MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)


@dataclass(frozen=True)
class SubscriptionFilter:
    """Фильтр для списка: None = без ограничения по этому измерению"""
    user_id: UUID | None = None
    service_name: str | None = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def matches(self, sub: Subscription) -> bool:
        if self.user_id is not None and sub.user_id != self.user_id:
            return False
        if self.service_name is not None and sub.service_name != self.service_name:
            return False
        return True


@dataclass(frozen=True)
class SummaryFilter:
    """Фильтр для агрегации: период [period_from, period_to] обязателен"""
    period_from: date
    period_to: date
    user_id: UUID | None = None
    service_name: str | None = None

    def matches(self, sub: Subscription) -> bool:
        if self.user_id is not None and sub.user_id != self.user_id:
            return False
        if self.service_name is not None and sub.service_name != self.service_name:
            return False
        return sub.is_active_during(self.period_from, self.period_to)


def check_period(period_from: date, period_to: date) -> None:
    if period_from > period_to:
        raise InvalidPeriod("from cannot be after to")


def sum_prices(subs: Iterable[Subscription], summary_filter: SummaryFilter) -> int:
    """Сумма price всех подписок, попавших в фильтр и пересекающих период (пусто -> 0)"""
    return sum(s.price for s in subs if summary_filter.matches(s))


def normalize_pagination(limit: int | None, offset: int | None) -> tuple[int, int]:
    """
    limit: None / 0 / отрицательный -> 20
    offset: None / отрицательный -> 0

    Верхняя граница limit не применяется.
    """
    if limit is None or limit <= 0:
        limit = DEFAULT_LIMIT
    if offset is None or offset < 0:
        offset = 0
    return limit, offset


def parse_identifier(raw: str, field: str = "id") -> UUID:
    try:
        return UUID(raw)
    except (ValueError, TypeError, AttributeError):
        raise InvalidIdentifier(f"invalid {field}")


def _parse_int(raw: str | None) -> int | None:
    # Нечисловой ввод считается отсутствующим и получает дефолт,
    # числа за пределами BIGINT прижимаются к границе
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return max(MIN_INT64, min(value, MAX_INT64))


def build_list_filter(
    user_id: str | None = None,
    service_name: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
) -> SubscriptionFilter:
    """
    Собрать фильтр списка из сырых query-параметров

    Raises:
        InvalidIdentifier: user_id передан, но это не UUID
    """
    parsed_user_id = parse_identifier(user_id, "user_id") if user_id else None
    page_limit, page_offset = normalize_pagination(_parse_int(limit), _parse_int(offset))

    return SubscriptionFilter(
        user_id=parsed_user_id,
        service_name=service_name or None,
        limit=page_limit,
        offset=page_offset,
    )

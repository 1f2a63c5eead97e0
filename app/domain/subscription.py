"""
Subscription domain entity + business rules (gate перед любым обращением к storage)
"""
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from app.domain.errors import InvalidPrice, InvalidDateRange


@dataclass
class Subscription:
    """
    Подписка пользователя на сервис

    Даты с точностью до месяца (день = 1).
    end_date = None означает бессрочную подписку.
    id и timestamps назначает storage при создании.
    """
    user_id: UUID
    service_name: str
    price: int  # в минимальных единицах валюты, >= 0
    start_date: date
    end_date: date | None = None
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_active_during(self, period_from: date, period_to: date) -> bool:
        """
        Пересекается ли подписка с периодом [period_from, period_to]

        Подписка активна, если началась не позже конца периода
        и закончилась (или не закончилась вовсе) не раньше его начала.
        """
        if self.start_date > period_to:
            return False
        return self.end_date is None or self.end_date >= period_from


def check_business_rules(sub: Subscription) -> None:
    """
    Бизнес-правила для create/update

    Raises:
        InvalidPrice: price < 0
        InvalidDateRange: end_date раньше start_date
    """
    if sub.price < 0:
        raise InvalidPrice()

    if sub.end_date is not None and sub.end_date < sub.start_date:
        raise InvalidDateRange()

"""
Request/Response models для subscriptions API + маппинг в domain
"""
from uuid import UUID

from pydantic import BaseModel, StrictInt

from app.domain.month import parse_month_year, format_month_year
from app.domain.subscription import Subscription


class SubscriptionRequest(BaseModel):
    """
    Тело POST / PUT

    Поля опциональны на уровне схемы: обязательность и форматы
    проверяет SubscriptionRequestValidator, чтобы вернуть все ошибки сразу.
    """
    service_name: str | None = None
    price: StrictInt | None = None  # true, "100", 100.0 -> 400
    user_id: UUID | None = None
    start_date: str | None = None  # "MM-YYYY"
    end_date: str | None = None  # "MM-YYYY", опционально


class SubscriptionResponse(BaseModel):
    id: UUID
    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None = None  # отсутствует в JSON если None


class SummaryResponse(BaseModel):
    total: int


class ErrorResponse(BaseModel):
    error: str


def to_domain(req: SubscriptionRequest) -> Subscription:
    """
    SubscriptionRequest -> Subscription (даты "MM-YYYY" -> date)

    Raises:
        InvalidDateFormat: start_date / end_date не в формате MM-YYYY
    """
    start_date = parse_month_year(req.start_date)
    end_date = parse_month_year(req.end_date) if req.end_date is not None else None

    return Subscription(
        user_id=req.user_id,
        service_name=req.service_name,
        price=req.price,
        start_date=start_date,
        end_date=end_date,
    )


def to_response(sub: Subscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=sub.id,
        service_name=sub.service_name,
        price=sub.price,
        user_id=sub.user_id,
        start_date=format_month_year(sub.start_date),
        end_date=format_month_year(sub.end_date) if sub.end_date is not None else None,
    )

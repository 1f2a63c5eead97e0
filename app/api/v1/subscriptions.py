"""
Subscription API endpoints
"""
from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_subscription_repository, get_validator
from app.api.v1.schemas import (
    SubscriptionRequest, SubscriptionResponse, SummaryResponse, ErrorResponse,
    to_domain, to_response,
)
from app.application.subscriptions import (
    CreateSubscriptionUseCase, GetSubscriptionUseCase, UpdateSubscriptionUseCase,
    DeleteSubscriptionUseCase, ListSubscriptionsUseCase, SummarizeSubscriptionsUseCase,
)
from app.domain.errors import InvalidPeriod
from app.domain.filters import SummaryFilter, build_list_filter, parse_identifier
from app.domain.month import parse_month_year
from app.domain.repository import SubscriptionRepository
from app.utils.validation import SubscriptionRequestValidator


router = APIRouter(
    prefix="/subscriptions",
    tags=["subscriptions"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


# === Endpoints ===

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
)
def create_subscription(
    req: SubscriptionRequest,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    validator: SubscriptionRequestValidator = Depends(get_validator),
):
    """Создать подписку"""
    validator.validate(req)
    sub = to_domain(req)

    created = CreateSubscriptionUseCase(repo).execute(sub)
    return to_response(created)


@router.get("/summary", response_model=SummaryResponse)
def summarize_subscriptions(
    period_from: str | None = Query(None, alias="from"),  # "MM-YYYY"
    period_to: str | None = Query(None, alias="to"),  # "MM-YYYY"
    user_id: str | None = None,
    service_name: str | None = None,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Суммарная стоимость подписок за период [from, to]"""
    if not period_from or not period_to:
        raise InvalidPeriod("from and to are required")

    summary_filter = SummaryFilter(
        period_from=parse_month_year(period_from),
        period_to=parse_month_year(period_to),
        user_id=parse_identifier(user_id, "user_id") if user_id else None,
        service_name=service_name or None,
    )

    total = SummarizeSubscriptionsUseCase(repo).execute(summary_filter)
    return SummaryResponse(total=total)


@router.get("", response_model=list[SubscriptionResponse], response_model_exclude_none=True)
def list_subscriptions(
    user_id: str | None = None,
    service_name: str | None = None,  # точное совпадение
    limit: str | None = None,
    offset: str | None = None,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Список подписок (новые первыми)"""
    subscription_filter = build_list_filter(user_id, service_name, limit, offset)

    subs = ListSubscriptionsUseCase(repo).execute(subscription_filter)
    return [to_response(s) for s in subs]


@router.get("/{sub_id}", response_model=SubscriptionResponse, response_model_exclude_none=True)
def get_subscription(
    sub_id: str,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Получить подписку по id"""
    sub = GetSubscriptionUseCase(repo).execute(parse_identifier(sub_id))
    return to_response(sub)


@router.put("/{sub_id}", response_model=SubscriptionResponse, response_model_exclude_none=True)
def update_subscription(
    sub_id: str,
    req: SubscriptionRequest,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    validator: SubscriptionRequestValidator = Depends(get_validator),
):
    """Обновить подписку (полная перезапись полей)"""
    parsed_id = parse_identifier(sub_id)
    validator.validate(req)

    sub = to_domain(req)
    sub.id = parsed_id

    updated = UpdateSubscriptionUseCase(repo).execute(sub)
    return to_response(updated)


@router.delete("/{sub_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    sub_id: str,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Удалить подписку"""
    DeleteSubscriptionUseCase(repo).execute(parse_identifier(sub_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

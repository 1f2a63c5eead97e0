"""
Validation utilities
"""
from functools import lru_cache
from typing import Any, Callable

from app.domain.errors import FieldError, ValidationFailed
from app.domain.month import is_month_year

MIN_SERVICE_NAME_LENGTH = 2


class SubscriptionRequestValidator:
    """
    Валидатор входящих запросов create/update

    Держит реестр именованных правил (custom rules), правило
    "month_year" регистрируется в конструкторе.

    Проверяются ВСЕ поля, ошибки собираются в один ValidationFailed.

    Usage:
        validator = SubscriptionRequestValidator()
        validator.validate(req)  # raise ValidationFailed
    """

    def __init__(self):
        self._rules: dict[str, Callable[[Any], bool]] = {}
        self.register_rule("month_year", is_month_year)

    def register_rule(self, name: str, predicate: Callable[[Any], bool]) -> None:
        self._rules[name] = predicate

    def check(self, rule: str, value: Any) -> bool:
        return self._rules[rule](value)

    def collect_errors(self, req) -> list[FieldError]:
        """
        Проверить запрос (объект с атрибутами service_name, price,
        user_id, start_date, end_date)

        Returns:
            Список ошибок по полям (пустой если всё ок)
        """
        errors: list[FieldError] = []

        service_name = req.service_name
        if not service_name:
            errors.append(FieldError("service_name", "is required"))
        elif len(service_name) < MIN_SERVICE_NAME_LENGTH:
            errors.append(FieldError(
                "service_name", f"must be at least {MIN_SERVICE_NAME_LENGTH} characters"
            ))

        if req.price is None:
            errors.append(FieldError("price", "is required"))
        elif req.price < 0:
            errors.append(FieldError("price", "must be >= 0"))

        if req.user_id is None:
            errors.append(FieldError("user_id", "is required"))

        if req.start_date is None:
            errors.append(FieldError("start_date", "is required"))
        elif not self.check("month_year", req.start_date):
            errors.append(FieldError("start_date", "must be in MM-YYYY format"))

        # end_date опционален
        if req.end_date is not None and not self.check("month_year", req.end_date):
            errors.append(FieldError("end_date", "must be in MM-YYYY format"))

        return errors

    def validate(self, req) -> None:
        """
        Raises:
            ValidationFailed: если есть хотя бы одна ошибка
        """
        errors = self.collect_errors(req)
        if errors:
            raise ValidationFailed(errors)


@lru_cache
def get_validator() -> SubscriptionRequestValidator:
    """Cached validator instance (FastAPI dependency)"""
    return SubscriptionRequestValidator()

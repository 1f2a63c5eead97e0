"""
Subscription errors - единая таксономия ошибок для всех слоёв

Каждая ошибка знает свой HTTP-эквивалент (status_code),
API слой превращает её в {"error": "<message>"}.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class SubscriptionError(Exception):
    """Base class for all subscription errors"""
    status_code = 400
    default_message = "bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(SubscriptionError):
    """Field-level validation failure (all failing fields collected)"""
    default_message = "validation failed"

    def __init__(self, field_errors: list[FieldError]):
        self.field_errors = list(field_errors)
        super().__init__("; ".join(str(e) for e in self.field_errors) or None)


class InvalidDateFormat(SubscriptionError):
    default_message = "invalid date format, expected MM-YYYY"


class InvalidPrice(SubscriptionError):
    default_message = "price must be >= 0"


class InvalidDateRange(SubscriptionError):
    default_message = "end_date cannot be before start_date"


class InvalidPeriod(SubscriptionError):
    default_message = "invalid aggregation period"


class InvalidIdentifier(SubscriptionError):
    default_message = "invalid id"


class NotFound(SubscriptionError):
    status_code = 404
    default_message = "subscription not found"


class StorageError(SubscriptionError):
    """Opaque storage failure; message never carries driver detail"""
    status_code = 500
    default_message = "internal storage error"

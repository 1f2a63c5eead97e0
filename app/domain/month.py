"""
Calendar month helpers - формат "MM-YYYY" для дат подписок

Все даты подписок хранятся с точностью до месяца: день всегда 1-е число.
"""
import re
from datetime import date

from app.domain.errors import InvalidDateFormat

# Строго две цифры месяца и четыре цифры года
_MONTH_YEAR_RE = re.compile(r"(0[1-9]|1[0-2])-([0-9]{4})")


def parse_month_year(value: str) -> date:
    """
    Распарсить строку "MM-YYYY" в date (1-е число месяца)

    Args:
        value: Строка вида "01-2025"

    Returns:
        date(2025, 1, 1)

    Raises:
        InvalidDateFormat: если строка не соответствует формату
            (в т.ч. ISO даты, месяц 00 или 13+)

    Example:
        >>> parse_month_year("07-2025")
        datetime.date(2025, 7, 1)
        >>> parse_month_year("2025-07")
        InvalidDateFormat: invalid date format, expected MM-YYYY
    """
    if not isinstance(value, str):
        raise InvalidDateFormat()

    match = _MONTH_YEAR_RE.fullmatch(value)
    if not match:
        raise InvalidDateFormat()

    month, year = int(match.group(1)), int(match.group(2))
    if year < 1:
        raise InvalidDateFormat()

    return date(year, month, 1)


def format_month_year(value: date) -> str:
    """date -> "MM-YYYY" (день игнорируется)"""
    return f"{value.month:02d}-{value.year:04d}"


def is_month_year(value) -> bool:
    try:
        parse_month_year(value)
    except InvalidDateFormat:
        return False
    return True

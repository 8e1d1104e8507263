from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from core.domain import Category


class InputError(ValueError):
    """Raw text that cannot be turned into a typed ledger argument."""


def parse_date(text: str) -> date:
    raw = text.strip()
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as e:
        raise InputError(f"not a YYYY-MM-DD date: {raw!r}") from e


def parse_amount(text: str) -> Decimal:
    raw = text.strip()
    try:
        value = Decimal(raw)
    except InvalidOperation as e:
        raise InputError(f"not a decimal: {raw!r}") from e
    if not value.is_finite():
        raise InputError(f"amount must be finite: {raw!r}")
    return value


def parse_int(text: str) -> int:
    raw = text.strip()
    try:
        return int(raw)
    except ValueError as e:
        raise InputError(f"not a number: {raw!r}") from e


def resolve_category(choice: int) -> Category:
    return Category.from_choice(choice)

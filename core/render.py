from decimal import Decimal
from typing import Iterable

import pandas as pd

from core.domain import Transaction

TRANSACTION_COLUMNS = ["id", "date", "category", "amount", "note"]


def format_amount(value: Decimal) -> str:
    # 50 -> "50.0", 12.50 -> "12.50", -3 -> "-3.0"
    text = format(value, "f")
    if "." not in text:
        text += ".0"
    return text


def format_transaction(t: Transaction) -> str:
    return f"{t.id} | {t.date.isoformat()} | {t.category} | {format_amount(t.amount)} | {t.note}"


def format_summary_line(key: object, total: Decimal) -> str:
    return f"{key}: {format_amount(total)}"


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "id": t.id,
            "date": pd.Timestamp(t.date),
            "category": str(t.category),
            "amount": float(t.amount),
            "note": t.note,
        }
        for t in trans
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def summary_frame(rows: Iterable[tuple[object, Decimal]], key: str) -> pd.DataFrame:
    return pd.DataFrame(
        [{key: str(k), "total": float(v)} for k, v in rows],
        columns=[key, "total"],
    )

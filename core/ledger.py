"""In-memory transaction store with synchronized date/category indexes.

A ``Ledger`` owns five structures that always move together:

- ``_by_id``: the authoritative id -> Transaction map
- ``_by_date``: date -> bucket, with ``_dates`` kept sorted for ordered reads
- ``_by_category``: category -> bucket, seeded for every category
- ``_monthly_totals``: running sums per month, with ``_months`` kept sorted
- ``_category_totals``: running sums per category, seeded at zero

Buckets hold references to the records in ``_by_id``. Every mutation goes
through ``_insert`` or ``_remove``.
"""
import bisect
from datetime import date
from decimal import Decimal
from typing import Dict, Iterator, List, Optional

from core.domain import Category, Transaction, YearMonth
from core.events import TRANSACTION_ADDED, TRANSACTION_DELETED, EventBus
from core.functional import Maybe, Nothing, Some
from core.lazy import iter_buckets, iter_items

ZERO = Decimal("0")


class Ledger:

    def __init__(self, events: Optional[EventBus] = None):
        self._events = events
        self._next_id = 1
        self._by_id: Dict[int, Transaction] = {}
        self._by_date: Dict[date, List[Transaction]] = {}
        self._dates: List[date] = []
        self._by_category: Dict[Category, List[Transaction]] = {c: [] for c in Category}
        self._monthly_totals: Dict[YearMonth, Decimal] = {}
        self._months: List[YearMonth] = []
        self._category_totals: Dict[Category, Decimal] = {c: ZERO for c in Category}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self._by_id

    def is_empty(self) -> bool:
        return not self._by_id

    # --- mutations

    def add(self, on: date, amount: Decimal, category: Category, note: str = "") -> Transaction:
        tx = Transaction(
            id=self._next_id,
            date=on,
            amount=_as_decimal(amount),
            category=Category(category),
            note=note,
        )
        self._next_id += 1
        self._insert(tx)
        if self._events is not None:
            self._events.publish(TRANSACTION_ADDED, {"transaction": tx})
        return tx

    def delete_by_id(self, tx_id: int) -> Maybe[Transaction]:
        tx = self._by_id.get(tx_id)
        if tx is None:
            return Nothing()
        self._remove(tx)
        if self._events is not None:
            self._events.publish(TRANSACTION_DELETED, {"transaction": tx})
        return Some(tx)

    def _insert(self, tx: Transaction) -> None:
        bucket = self._by_date.get(tx.date)
        if bucket is None:
            bucket = self._by_date[tx.date] = []
            bisect.insort(self._dates, tx.date)
        bucket.append(tx)

        self._by_category[tx.category].append(tx)

        ym = tx.year_month
        if ym not in self._monthly_totals:
            self._monthly_totals[ym] = ZERO
            bisect.insort(self._months, ym)
        self._monthly_totals[ym] += tx.amount
        self._category_totals[tx.category] += tx.amount

        self._by_id[tx.id] = tx

    def _remove(self, tx: Transaction) -> None:
        del self._by_id[tx.id]

        bucket = self._by_date[tx.date]
        _remove_identical(bucket, tx)
        if not bucket:
            del self._by_date[tx.date]
            del self._dates[bisect.bisect_left(self._dates, tx.date)]

        # category buckets and both totals maps keep their keys
        _remove_identical(self._by_category[tx.category], tx)
        self._monthly_totals[tx.year_month] -= tx.amount
        self._category_totals[tx.category] -= tx.amount

    # --- queries

    def get(self, tx_id: int) -> Maybe[Transaction]:
        return Maybe.from_optional(self._by_id.get(tx_id))

    def all(self) -> Iterator[Transaction]:
        return iter_buckets(self._by_date, self._dates)

    def by_category(self, category: Category) -> Iterator[Transaction]:
        return iter(tuple(self._by_category[Category(category)]))

    def by_date_range(self, start: date, end: date) -> Iterator[Transaction]:
        """Transactions with ``start <= date <= end``; empty when start > end."""
        lo = bisect.bisect_left(self._dates, start)
        hi = bisect.bisect_right(self._dates, end)
        return iter_buckets(self._by_date, self._dates[lo:hi])

    def monthly_summary(self) -> Iterator[tuple[YearMonth, Decimal]]:
        return iter_items(self._monthly_totals, self._months)

    def category_summary(self) -> Iterator[tuple[Category, Decimal]]:
        return iter_items(self._category_totals, Category)

    def monthly_total(self, ym: YearMonth) -> Decimal:
        return self._monthly_totals.get(ym, ZERO)

    def category_total(self, category: Category) -> Decimal:
        return self._category_totals[Category(category)]


def _as_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def _remove_identical(bucket: List[Transaction], tx: Transaction) -> None:
    for i, candidate in enumerate(bucket):
        if candidate is tx:
            del bucket[i]
            return
    raise AssertionError(f"transaction {tx.id} missing from its bucket")

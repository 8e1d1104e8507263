from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import NamedTuple


class Category(str, Enum):
    # declaration order is the numbered menu order
    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    BILLS = "BILLS"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    OTHER = "OTHER"

    @classmethod
    def from_choice(cls, choice: int) -> "Category":
        """Map a 1-based menu index to a category, falling back to OTHER."""
        members = list(cls)
        if 1 <= choice <= len(members):
            return members[choice - 1]
        return cls.OTHER

    def __str__(self) -> str:
        return self.value


class YearMonth(NamedTuple):
    year: int
    month: int

    @classmethod
    def of(cls, d: date) -> "YearMonth":
        return cls(d.year, d.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, eq=False)
class Transaction:
    id: int
    date: date
    amount: Decimal    # signed, refunds are negative
    category: Category
    note: str = ""

    @property
    def year_month(self) -> YearMonth:
        return YearMonth.of(self.date)

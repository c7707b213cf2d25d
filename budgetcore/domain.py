from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple, Union

from budgetcore.errors import IndexOutOfRange, InvalidAmount, InvalidInput
from budgetcore.filters import by_timestamp_range, iter_expenses
from budgetcore.timeparse import format_timestamp, now, parse_or_default

OVERALL = "Overall"

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount(f"Amount must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Amount must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be a finite number, got {value!r}")
    return amount


def positive_amount(value: Number) -> Decimal:
    amount = to_decimal(value)
    if amount <= 0:
        raise InvalidAmount("Expense amount must be a positive number.")
    return amount


def non_negative_amount(value: Number) -> Decimal:
    amount = to_decimal(value)
    if amount < 0:
        raise InvalidAmount("Amount must be a non-negative number.")
    return amount


@dataclass(frozen=True)
class Expense:
    amount: Decimal
    description: str
    timestamp: datetime = field(default_factory=now)

    def __post_init__(self):
        object.__setattr__(self, "amount", positive_amount(self.amount))
        if not isinstance(self.description, str) or not self.description.strip():
            raise InvalidInput("Expense description cannot be empty.")
        object.__setattr__(self, "description", self.description.strip())
        if not isinstance(self.timestamp, datetime):
            raise InvalidInput(f"Expense timestamp must be a datetime, got {self.timestamp!r}")

    @classmethod
    def create(
        cls,
        amount: Number,
        description: str,
        timestamp: Union[datetime, str, None] = None,
    ) -> "Expense":
        if not isinstance(timestamp, datetime):
            timestamp = parse_or_default(timestamp)
        return cls(amount=amount, description=description, timestamp=timestamp)

    def edited(
        self,
        amount: Optional[Number] = None,
        description: Optional[str] = None,
        timestamp: Union[datetime, str, None] = None,
    ) -> "Expense":
        changes = {}
        if amount is not None:
            changes["amount"] = amount
        if description is not None:
            changes["description"] = description
        if timestamp is not None:
            if not isinstance(timestamp, datetime):
                timestamp = parse_or_default(timestamp)
            changes["timestamp"] = timestamp
        return replace(self, **changes)

    def __str__(self) -> str:
        return f"${self.amount:.2f} - {self.description} ({format_timestamp(self.timestamp)})"


class Budget:
    """A named spending limit and the expenses recorded against it.

    Expenses are kept in insertion order. Indices handed to and from users are 1-based and
    count from the most recently added expense, matching the order of ``list_expenses``.
    """

    def __init__(self, name: str, limit: Number = 0):
        if not name or not name.strip():
            raise InvalidInput("Budget name cannot be empty.")
        self.name = name
        self._limit = non_negative_amount(limit)
        self._expenses: List[Expense] = []

    def __repr__(self) -> str:
        return f"Budget(name={self.name!r}, limit={self._limit}, expenses={len(self._expenses)})"

    def __len__(self) -> int:
        return len(self._expenses)

    @property
    def limit(self) -> Decimal:
        return self._limit

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        return tuple(self._expenses)

    @property
    def total_expenses(self) -> Decimal:
        return sum((e.amount for e in self._expenses), Decimal("0"))

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0"), self._limit - self.total_expenses)

    def set_limit(self, amount: Number) -> None:
        self._limit = non_negative_amount(amount)

    def add_expense(self, expense: Expense) -> None:
        self._expenses.append(expense)

    def _position(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int) or index < 1 or index > len(self._expenses):
            raise IndexOutOfRange(
                f"Invalid index {index}. Please provide a number between 1 and {len(self._expenses)}."
            )
        return len(self._expenses) - index

    def expense_at(self, index: int) -> Expense:
        return self._expenses[self._position(index)]

    def delete_expense(self, index: int) -> Expense:
        return self._expenses.pop(self._position(index))

    def remove_expense(self, expense: Expense) -> bool:
        for i, e in enumerate(self._expenses):
            if e == expense:
                del self._expenses[i]
                return True
        return False

    def replace_expense_at(self, index: int, new: Expense) -> Expense:
        position = self._position(index)
        old = self._expenses[position]
        self._expenses[position] = new
        return old

    def replace_expense(self, old: Expense, new: Expense) -> bool:
        for i, e in enumerate(self._expenses):
            if e == old:
                self._expenses[i] = new
                return True
        return False

    def list_expenses(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Tuple[int, Expense]]:
        size = len(self._expenses)
        newest_first = ((size - i, self._expenses[i]) for i in range(size - 1, -1, -1))
        keep = by_timestamp_range(start, end)
        return list(iter_expenses(newest_first, lambda item: keep(item[1])))

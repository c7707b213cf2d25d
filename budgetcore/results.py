from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from budgetcore.alert import AlertTriggered
from budgetcore.domain import OVERALL, Budget, Expense


@dataclass(frozen=True)
class BudgetStatus:
    name: str
    limit: Decimal
    spent: Decimal
    remaining: Decimal
    count: int

    @classmethod
    def of(cls, budget: Budget) -> "BudgetStatus":
        return cls(
            name=budget.name,
            limit=budget.limit,
            spent=budget.total_expenses,
            remaining=budget.remaining,
            count=len(budget),
        )


@dataclass(frozen=True)
class AddExpenseResult:
    expense: Expense
    category: Optional[str]        # None when no category was given
    category_found: bool
    alert: Optional[AlertTriggered] = None


@dataclass(frozen=True)
class DeleteExpenseResult:
    index: int
    expense: Expense
    categories: Tuple[str, ...]    # other budgets the expense was also removed from


@dataclass(frozen=True)
class EditExpenseResult:
    index: int
    before: Expense
    after: Expense
    categories: Tuple[str, ...]
    alert: Optional[AlertTriggered] = None


@dataclass(frozen=True)
class SetBudgetResult:
    name: str
    limit: Decimal
    created: bool

    @property
    def overall(self) -> bool:
        return self.name == OVERALL


@dataclass(frozen=True)
class EditBudgetResult:
    old_name: str
    name: str
    old_limit: Decimal
    limit: Decimal

    @property
    def renamed(self) -> bool:
        return self.old_name != self.name

    @property
    def limit_changed(self) -> bool:
        return self.old_limit != self.limit

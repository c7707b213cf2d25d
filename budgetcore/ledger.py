import logging
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from budgetcore import events
from budgetcore.alert import AlertChange, AlertThreshold, AlertTriggered
from budgetcore.domain import OVERALL, Budget, Expense, Number
from budgetcore.errors import (
    CategoryNotFound,
    InvalidInput,
    NoOverallBudget,
)
from budgetcore.events import EventBus
from budgetcore.filters import by_keyword
from budgetcore.functional import Maybe, safe_lookup
from budgetcore.results import (
    AddExpenseResult,
    BudgetStatus,
    DeleteExpenseResult,
    EditBudgetResult,
    EditExpenseResult,
    SetBudgetResult,
)

logger = logging.getLogger(__name__)

Timestamp = Union[datetime, str, None]


def _blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


class BudgetLedger:
    """Category budgets plus the ``Overall`` budget that mirrors every expense.

    Every expense goes to ``Overall``; it also goes to its category budget when that
    budget exists. Expenses are matched across budgets by value, so deleting or editing
    an ``Overall`` entry touches the first equal entry of every other budget.

    Operations return plain result values and publish the same facts on ``bus``.
    Recoverable problems raise subclasses of :class:`~budgetcore.errors.BudgetError`.
    """

    def __init__(self, bus: Optional[EventBus] = None):
        self.bus = bus if bus is not None else EventBus()
        self.alert = AlertThreshold()
        self._budgets: Dict[str, Budget] = {OVERALL: Budget(OVERALL, 0)}
        logger.info("Ledger initialised with %s budget", OVERALL)

    @property
    def budgets(self) -> Mapping[str, Budget]:
        return MappingProxyType(self._budgets)

    @property
    def overall(self) -> Budget:
        if OVERALL not in self._budgets:
            raise NoOverallBudget(f"No {OVERALL} budget found.")
        return self._budgets[OVERALL]

    def find_budget(self, name: str) -> Maybe[Budget]:
        return safe_lookup(self._budgets, name)

    def _others(self):
        return ((name, b) for name, b in self._budgets.items() if name != OVERALL)

    # expenses

    def add_expense(
        self,
        category: Optional[str],
        amount: Number,
        description: str,
        timestamp: Timestamp = None,
    ) -> AddExpenseResult:
        expense = Expense.create(amount, description, timestamp)
        self._budgets.setdefault(OVERALL, Budget(OVERALL, 0)).add_expense(expense)

        category = None if _blank(category) else category.strip()
        found = True
        # Overall already holds every expense
        if category is not None and category != OVERALL:
            target = self.find_budget(category)
            if target.is_some():
                target.get_or_else(None).add_expense(expense)
            else:
                found = False
                logger.warning("Budget category '%s' not found. Added to %s only.", category, OVERALL)
                self.bus.publish(events.CATEGORY_NOT_FOUND, {"category": category, "expense": expense})

        logger.info("Expense added: %s", expense)
        self.bus.publish(events.EXPENSE_ADDED, {
            "expense": expense,
            "category": category if found else None,
        })
        return AddExpenseResult(
            expense=expense,
            category=category,
            category_found=found,
            alert=self.check_alert(),
        )

    def delete_expense(self, index: int) -> DeleteExpenseResult:
        overall = self.overall
        removed = overall.delete_expense(index)
        logger.info("Expense at index %s deleted from %s: %s", index, OVERALL, removed)

        touched = []
        for name, budget in self._others():
            if budget.remove_expense(removed):
                touched.append(name)
                logger.info("Expense also deleted from category '%s'", name)

        self.bus.publish(events.EXPENSE_DELETED, {"expense": removed, "categories": tuple(touched)})
        return DeleteExpenseResult(index=index, expense=removed, categories=tuple(touched))

    def edit_expense(
        self,
        index: int,
        amount: Optional[Number] = None,
        description: Optional[str] = None,
        timestamp: Timestamp = None,
    ) -> EditExpenseResult:
        if isinstance(timestamp, str) and _blank(timestamp):
            timestamp = None
        if amount is None and description is None and timestamp is None:
            raise InvalidInput("At least one of amount, description or time must be provided.")
        overall = self.overall
        before = overall.expense_at(index)
        after = before.edited(amount=amount, description=description, timestamp=timestamp)
        overall.replace_expense_at(index, after)

        touched = []
        for name, budget in self._others():
            if budget.replace_expense(before, after):
                touched.append(name)

        logger.info("Expense at index %s updated: %s -> %s", index, before, after)
        self.bus.publish(events.EXPENSE_EDITED, {"before": before, "after": after, "categories": tuple(touched)})
        return EditExpenseResult(
            index=index,
            before=before,
            after=after,
            categories=tuple(touched),
            alert=self.check_alert(),
        )

    def find_expense(self, keyword: str) -> List[Tuple[int, Expense]]:
        if _blank(keyword):
            raise InvalidInput("Keyword cannot be empty.")
        matches = by_keyword(keyword.strip())
        return [(i, e) for i, e in enumerate(self.overall.expenses, start=1) if matches(e)]

    def list_all_expenses(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Tuple[int, Expense]]:
        return self.overall.list_expenses(start, end)

    def get_total_expenses(self) -> Decimal:
        return self.find_budget(OVERALL).map(lambda b: b.total_expenses).get_or_else(Decimal("0"))

    # budgets

    def set_budget(self, category: Optional[str], amount: Number) -> SetBudgetResult:
        name = OVERALL if _blank(category) else category.strip()
        existing = self.find_budget(name)
        if existing.is_some():
            budget = existing.get_or_else(None)
            budget.set_limit(amount)
            logger.info("Updated budget for %s to %s", name, budget.limit)
        else:
            budget = Budget(name, amount)
            self._budgets[name] = budget
            logger.info("Created budget %s with limit %s", name, budget.limit)

        result = SetBudgetResult(name=name, limit=budget.limit, created=existing.is_none())
        self.bus.publish(events.BUDGET_SET, {"name": name, "limit": budget.limit, "created": result.created})
        return result

    def edit_budget(
        self,
        name: str,
        new_limit: Optional[Number] = None,
        new_name: Optional[str] = None,
    ) -> EditBudgetResult:
        if new_limit is None and _blank(new_name):
            raise InvalidInput("Must specify a new amount or a new name.")
        name = "" if name is None else name.strip()
        budget = self.find_budget(name).get_or_else(None)
        if budget is None:
            raise CategoryNotFound(name)

        target = name if _blank(new_name) else new_name.strip()
        if target != name:
            if name == OVERALL:
                raise InvalidInput(f"The {OVERALL} budget cannot be renamed.")
            if target in self._budgets:
                raise InvalidInput(f"Budget category '{target}' already exists.")

        old_limit = budget.limit
        if new_limit is not None:
            budget.set_limit(new_limit)
        if target != name:
            # rebuild to keep the renamed budget at its original position
            budget.name = target
            self._budgets = {(target if k == name else k): v for k, v in self._budgets.items()}
            logger.info("Budget category '%s' renamed to '%s'", name, target)

        result = EditBudgetResult(old_name=name, name=target, old_limit=old_limit, limit=budget.limit)
        self.bus.publish(events.BUDGET_EDITED, {
            "old_name": name, "name": target, "old_limit": old_limit, "limit": budget.limit,
        })
        return result

    def check_budget(self, category: Optional[str] = None) -> BudgetStatus:
        if _blank(category):
            return BudgetStatus.of(self.overall)
        budget = self.find_budget(category.strip()).get_or_else(None)
        if budget is None:
            logger.warning("Budget category '%s' not found.", category)
            raise CategoryNotFound(category.strip())
        return BudgetStatus.of(budget)

    def summary(self) -> Dict[str, BudgetStatus]:
        return {name: BudgetStatus.of(b) for name, b in self._budgets.items()}

    # alert

    def set_alert(self, amount: Number) -> AlertChange:
        change = self.alert.set_alert(amount)
        self.bus.publish(events.ALERT_SET, {"previous": change.previous, "amount": change.current})
        return change

    def remove_alert(self) -> AlertChange:
        return self.set_alert(0)

    def check_alert(self) -> Optional[AlertTriggered]:
        triggered = self.alert.check_alert(self.get_total_expenses())
        if triggered is not None:
            self.bus.publish(events.BUDGET_ALERT, {"threshold": triggered.threshold, "total": triggered.total})
        return triggered

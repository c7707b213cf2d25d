from budgetcore.domain import OVERALL, Budget, Expense
from budgetcore.errors import (
    BudgetError,
    CategoryNotFound,
    IndexOutOfRange,
    InvalidAmount,
    InvalidIndex,
    InvalidInput,
    NoOverallBudget,
)
from budgetcore.ledger import BudgetLedger

__all__ = [
    'OVERALL', 'Budget', 'Expense', 'BudgetLedger',
    'BudgetError', 'CategoryNotFound', 'IndexOutOfRange', 'InvalidAmount',
    'InvalidIndex', 'InvalidInput', 'NoOverallBudget',
]

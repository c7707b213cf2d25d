class BudgetError(ValueError):
    """Base class for every recoverable ledger error shown to the user."""


class InvalidAmount(BudgetError):
    pass


class InvalidIndex(BudgetError):
    pass


class IndexOutOfRange(InvalidIndex):
    pass


class InvalidInput(BudgetError):
    pass


class CategoryNotFound(BudgetError):
    def __init__(self, category: str):
        super().__init__(f"Budget category '{category}' not found.")
        self.category = category


class NoOverallBudget(BudgetError):
    pass

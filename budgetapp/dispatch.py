from __future__ import annotations

import logging
from dataclasses import dataclass

from budgetcore.errors import BudgetError, CategoryNotFound
from budgetcore.ledger import BudgetLedger

from budgetapp import parser, presenter
from budgetapp.config import DEFAULT_MAX_AMOUNT

logger = logging.getLogger(__name__)


@dataclass
class Reply:
    text: str
    exit: bool = False


class CommandDispatcher:
    """Runs parsed commands against a ledger and renders the outcome.

    This is the only place where ledger errors are caught.
    """

    def __init__(self, ledger: BudgetLedger, max_amount=DEFAULT_MAX_AMOUNT):
        self.ledger = ledger
        self.max_amount = max_amount

    def handle_line(self, line: str) -> Reply:
        parsed = parser.parse_command(line, self.max_amount)
        if parsed.is_left():
            return Reply(presenter.error(parsed.get_error()))
        return self.execute(parsed.get_or_else(None))

    def execute(self, command) -> Reply:
        try:
            return self._execute(command)
        except CategoryNotFound as e:
            return Reply(presenter.notice(str(e)))
        except BudgetError as e:
            logger.info("Command %r rejected: %s", command, e)
            return Reply(presenter.error(str(e)))

    def _execute(self, command) -> Reply:
        ledger = self.ledger
        if isinstance(command, parser.AddExpense):
            result = ledger.add_expense(command.category, command.amount, command.description, command.timestamp)
            return Reply(presenter.added_expense(result))
        if isinstance(command, parser.DeleteExpense):
            return Reply(presenter.deleted_expense(ledger.delete_expense(command.index)))
        if isinstance(command, parser.ListExpenses):
            return Reply(presenter.expense_list(ledger.list_all_expenses(command.start, command.end)))
        if isinstance(command, parser.EditExpense):
            result = ledger.edit_expense(command.index, command.amount, command.description, command.timestamp)
            return Reply(presenter.edited_expense(result))
        if isinstance(command, parser.SetBudget):
            return Reply(presenter.budget_set(ledger.set_budget(command.category, command.amount)))
        if isinstance(command, parser.CheckBudget):
            return Reply(presenter.budget_status(ledger.check_budget(command.category)))
        if isinstance(command, parser.EditBudget):
            result = ledger.edit_budget(command.name, command.amount, command.new_name)
            return Reply(presenter.budget_edited(result))
        if isinstance(command, parser.Summary):
            return Reply(presenter.budget_summary(ledger.summary()))
        if isinstance(command, parser.SetAlert):
            return Reply(presenter.alert_changed(ledger.set_alert(command.amount)))
        if isinstance(command, parser.DeleteAlert):
            return Reply(presenter.alert_changed(ledger.remove_alert()))
        if isinstance(command, parser.FindExpense):
            return Reply(presenter.matching_expenses(command.keyword, ledger.find_expense(command.keyword)))
        if isinstance(command, parser.Help):
            return Reply(presenter.help_text())
        if isinstance(command, parser.Exit):
            return Reply(presenter.goodbye(), exit=True)
        raise TypeError(f"Unsupported command: {command!r}")

"""Console rendering of ledger results.

Nothing in ``budgetcore`` prints; every message the user sees is built here.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from budgetcore.alert import AlertChange, AlertTriggered
from budgetcore.domain import OVERALL, Expense
from budgetcore.results import (
    AddExpenseResult,
    BudgetStatus,
    DeleteExpenseResult,
    EditBudgetResult,
    EditExpenseResult,
    SetBudgetResult,
)
from budgetcore.timeparse import format_timestamp

from budgetapp.parser import USAGE

SEPARATOR = "_" * 43

LOGO = """\
|                     |
|  $$$$       $$$$    |
| $    $     $    $   |
| $    $     $    $   |
|  $$$$       $$$$    |
|_____________________|"""


def money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def framed(*lines: str) -> str:
    return "\n".join([SEPARATOR, *lines, SEPARATOR])


def welcome() -> str:
    return "\n".join([
        LOGO,
        "Hello! I'm your Budget Buddy",
        "What can I do for you?",
        "Input 'help' if you want to know what I can do!!",
        SEPARATOR,
    ])


def goodbye() -> str:
    return framed("Thank you for using Budget Buddy.", "Goodbye!")


def help_text() -> str:
    lines = ["Available Commands:"]
    for name, usage in USAGE.items():
        lines.append(f"  {name:<13} {usage}")
    lines.append("")
    lines.append("Time format: Oct 05 2025 at 12:30 (current time is used when omitted or invalid)")
    lines.append("Use 'alert 0' or 'delete-alert' to remove the alert.")
    return framed(*lines)


def error(message: str) -> str:
    return framed(f"Error: {message}")


def notice(message: str) -> str:
    return framed(message)


def alert_warning(alert: AlertTriggered) -> str:
    return framed(
        f"Warning: Your total expenses ({money(alert.total)}) have exceeded "
        f"the alert limit of {money(alert.threshold)}"
    )


def added_expense(result: AddExpenseResult) -> str:
    lines = []
    if not result.category_found:
        lines.append(f"Budget category '{result.category}' not found. Added to {OVERALL} Budget only.")
    lines.append(f"Expense Added: {result.expense}")
    out = framed(*lines)
    if result.alert is not None:
        out += "\n" + alert_warning(result.alert)
    return out


def deleted_expense(result: DeleteExpenseResult) -> str:
    lines = [
        f"The following expense has been deleted successfully from {OVERALL} Budget.",
        f"-> {result.expense}",
    ]
    lines.extend(f"Expense also deleted from category '{name}'." for name in result.categories)
    return framed(*lines)


def edited_expense(result: EditExpenseResult) -> str:
    out = framed(
        f"Got it, the expense at index {result.index} has been updated!",
        f"Updated expense -> {result.after}",
    )
    if result.alert is not None:
        out += "\n" + alert_warning(result.alert)
    return out


def newest_first_rows(matches: Sequence[Tuple[int, Expense]], size: int) -> List[Tuple[int, Expense]]:
    """Renumber oldest-first search matches with the newest-first numbers delete uses."""
    return [(size - index + 1, e) for index, e in matches]


def expense_table(rows: Sequence[Tuple[int, Expense]]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "#": index,
                "Amount": money(e.amount),
                "Description": e.description,
                "Time": format_timestamp(e.timestamp),
            }
            for index, e in rows
        ],
        columns=["#", "Amount", "Description", "Time"],
    )


def expense_list(rows: Sequence[Tuple[int, Expense]]) -> str:
    if not rows:
        return framed("No expenses recorded.")
    table = expense_table(rows).to_string(index=False)
    return framed("Expense List:", table)


def matching_expenses(keyword: str, rows: List[Tuple[int, Expense]]) -> str:
    lines = [f"Expenses Matching: '{keyword}'"]
    if not rows:
        lines.append(f"No matching expenses found for keyword: {keyword}")
    else:
        lines.extend(f"{index}. {e}" for index, e in rows)
    return framed(*lines)


def budget_set(result: SetBudgetResult) -> str:
    if result.overall:
        return framed(f"{OVERALL} Budget set to: {money(result.limit)}")
    return framed(f"Budget for {result.name} set to: {money(result.limit)}")


def budget_edited(result: EditBudgetResult) -> str:
    lines = []
    if result.renamed:
        lines.append(f"Budget category '{result.old_name}' renamed to '{result.name}'.")
    if result.limit_changed:
        lines.append(f"Budget limit for {result.name} updated to: {money(result.limit)}")
    if not lines:
        lines.append(f"Budget {result.name} is unchanged.")
    return framed(*lines)


def budget_status(status: BudgetStatus) -> str:
    title = f"{OVERALL} Budget:" if status.name == OVERALL else f"Budget for {status.name}"
    return framed(
        title,
        "",
        f"Total Budget: {money(status.limit)}",
        f"Spent: {money(status.spent)}",
        f"Remaining: {money(status.remaining)}",
    )


def summary_table(statuses: Dict[str, BudgetStatus]) -> pd.DataFrame:
    frame = pd.DataFrame(
        [
            {
                "Category": s.name,
                "Limit": float(s.limit),
                "Spent": float(s.spent),
                "Remaining": float(s.remaining),
                "Expenses": s.count,
            }
            for s in statuses.values()
        ],
        columns=["Category", "Limit", "Spent", "Remaining", "Expenses"],
    )
    return frame


def budget_summary(statuses: Dict[str, BudgetStatus]) -> str:
    table = summary_table(statuses)
    for column in ("Limit", "Spent", "Remaining"):
        table[column] = table[column].map(lambda v: f"${v:,.2f}")
    return framed("Budget Summary:", table.to_string(index=False))


def alert_changed(change: AlertChange) -> str:
    if change.removed:
        return framed("Budget alert has been removed.")
    if change.replaced:
        return framed(f"Alert amount updated to {money(change.current)}")
    return framed(
        f"Budget alert set at {money(change.current)}. "
        "You will be notified if expenses exceed this amount."
    )

"""Turns command lines such as ``add 15.50 c/Food d/Lunch`` into typed commands.

Every parser returns an :class:`~budgetcore.functional.Either`: ``Right(command)`` on
success, ``Left(message)`` with a usage hint otherwise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Optional, Tuple

from budgetcore.functional import Either, Left, Right
from budgetcore.timeparse import parse_timestamp

from budgetapp.config import DEFAULT_MAX_AMOUNT


@dataclass(frozen=True)
class AddExpense:
    amount: Decimal
    description: str
    category: Optional[str] = None
    timestamp: Optional[str] = None


@dataclass(frozen=True)
class DeleteExpense:
    index: int


@dataclass(frozen=True)
class ListExpenses:
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class EditExpense:
    index: int
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    timestamp: Optional[str] = None


@dataclass(frozen=True)
class SetBudget:
    amount: Decimal
    category: str = ""


@dataclass(frozen=True)
class CheckBudget:
    category: str = ""


@dataclass(frozen=True)
class EditBudget:
    name: str
    amount: Optional[Decimal] = None
    new_name: Optional[str] = None


@dataclass(frozen=True)
class Summary:
    pass


@dataclass(frozen=True)
class SetAlert:
    amount: Decimal


@dataclass(frozen=True)
class DeleteAlert:
    pass


@dataclass(frozen=True)
class FindExpense:
    keyword: str


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Exit:
    pass


USAGE = {
    "add": "add AMOUNT [c/CATEGORY] d/DESCRIPTION [t/TIME]",
    "delete": "delete INDEX",
    "list": "list [from/TIME] [to/TIME]",
    "edit-expense": "edit-expense INDEX [a/AMOUNT] [d/DESCRIPTION] [t/TIME]",
    "set-budget": "set-budget AMOUNT | set-budget c/CATEGORY AMOUNT",
    "check-budget": "check-budget [c/CATEGORY]",
    "edit-budget": "edit-budget old/CURRENT_NAME [a/NEW_AMOUNT] [c/NEW_NAME]",
    "summary": "summary",
    "alert": "alert AMOUNT",
    "delete-alert": "delete-alert",
    "find": "find KEYWORD",
    "help": "help",
    "bye": "bye",
}


def split_prefixed(text: str, prefixes: Tuple[str, ...]) -> Tuple[str, Dict[str, str]]:
    """Split ``text`` into the leading positional part and ``{prefix: value}``.

    A prefix only counts at the start of the text or after whitespace, so values such as
    ``d/50/50 split`` keep their slashes.
    """
    pattern = re.compile(r"(?:^|(?<=\s))(" + "|".join(map(re.escape, prefixes)) + r")/")
    matches = list(pattern.finditer(text))
    if not matches:
        return text.strip(), {}
    head = text[:matches[0].start()].strip()
    values: Dict[str, str] = {}
    for m, nxt in zip(matches, matches[1:] + [None]):
        end = nxt.start() if nxt is not None else len(text)
        values.setdefault(m.group(1), text[m.end():end].strip())
    return head, values


def parse_amount(text: str, max_amount: Decimal) -> Either[str, Decimal]:
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return Left(f"Invalid amount format: '{text.strip()}'")
    if not amount.is_finite():
        return Left(f"Invalid amount format: '{text.strip()}'")
    if amount > max_amount:
        return Left(f"Amount must be between 0 and {max_amount}")
    return Right(amount)


def parse_index(text: str) -> Either[str, int]:
    text = text.strip()
    if not re.fullmatch(r"[+-]?\d+", text):
        return Left(f"Invalid index: '{text}'. Please provide a whole number.")
    return Right(int(text))


def _usage(name: str, problem: str) -> str:
    return f"{problem} Use: {USAGE[name]}"


def _parse_add(args: str, max_amount: Decimal) -> Either[str, object]:
    head, values = split_prefixed(args, ("c", "d", "t"))
    if not head:
        return Left(_usage("add", "Missing amount."))
    description = values.get("d", "")
    if not description:
        return Left(_usage("add", "Missing description."))
    return parse_amount(head, max_amount).map(lambda amount: AddExpense(
        amount=amount,
        description=description,
        category=values.get("c") or None,
        timestamp=values.get("t") or None,
    ))


def _parse_delete(args: str, max_amount: Decimal) -> Either[str, object]:
    if not args:
        return Left(_usage("delete", "Missing index."))
    return parse_index(args).map(DeleteExpense)


def _parse_list(args: str, max_amount: Decimal) -> Either[str, object]:
    head, values = split_prefixed(args, ("from", "to"))
    if head:
        return Left(_usage("list", f"Unexpected argument '{head}'."))
    bounds = {}
    for key in ("from", "to"):
        text = values.get(key)
        if text:
            parsed = parse_timestamp(text)
            if parsed is None:
                return Left(f"Invalid time '{text}'. Use the format: Oct 05 2025 at 12:30")
            bounds[key] = parsed
    return Right(ListExpenses(start=bounds.get("from"), end=bounds.get("to")))


def _parse_edit_expense(args: str, max_amount: Decimal) -> Either[str, object]:
    head, values = split_prefixed(args, ("a", "d", "t"))
    if not head:
        return Left(_usage("edit-expense", "Missing index."))
    if not any(values.get(k) for k in ("a", "d", "t")):
        return Left(_usage("edit-expense", "At least one edit field must be provided."))

    def build(index: int) -> Either[str, object]:
        amount: Either[str, Optional[Decimal]] = Right(None)
        if values.get("a"):
            amount = parse_amount(values["a"], max_amount)
        return amount.map(lambda a: EditExpense(
            index=index,
            amount=a,
            description=values.get("d") or None,
            timestamp=values.get("t") or None,
        ))

    return parse_index(head).bind(build)


def _parse_set_budget(args: str, max_amount: Decimal) -> Either[str, object]:
    head, values = split_prefixed(args, ("c",))
    if "c" in values:
        # "c/Food 300": the amount is the last word of the category part
        category, _, amount = values["c"].rpartition(" ")
        if head or not category.strip():
            return Left(_usage("set-budget", "Missing category or amount."))
        return parse_amount(amount, max_amount).map(lambda a: SetBudget(amount=a, category=category.strip()))
    if not head:
        return Left(_usage("set-budget", "Missing amount."))
    return parse_amount(head, max_amount).map(lambda a: SetBudget(amount=a))


def _parse_check_budget(args: str, max_amount: Decimal) -> Either[str, object]:
    head, values = split_prefixed(args, ("c",))
    if head:
        return Left(_usage("check-budget", f"Unexpected argument '{head}'."))
    return Right(CheckBudget(category=values.get("c", "")))


def _parse_edit_budget(args: str, max_amount: Decimal) -> Either[str, object]:
    head, values = split_prefixed(args, ("old", "a", "c"))
    name = values.get("old", "")
    if not name:
        return Left(_usage("edit-budget", "Missing old/ prefix."))
    if "c" in values and not values["c"]:
        return Left("Budget name cannot be empty.")
    if not values.get("a") and not values.get("c"):
        return Left(_usage("edit-budget", "Must specify at least one of a/ or c/."))
    amount: Either[str, Optional[Decimal]] = Right(None)
    if values.get("a"):
        amount = parse_amount(values["a"], max_amount)
    return amount.map(lambda a: EditBudget(name=name, amount=a, new_name=values.get("c") or None))


def _parse_alert(args: str, max_amount: Decimal) -> Either[str, object]:
    if not args:
        return Left(_usage("alert", "Missing amount."))
    return parse_amount(args, max_amount).map(SetAlert)


def _parse_find(args: str, max_amount: Decimal) -> Either[str, object]:
    if not args:
        return Left(_usage("find", "Keyword cannot be empty."))
    return Right(FindExpense(keyword=args))


def _no_args(command: object) -> Callable[[str, Decimal], Either[str, object]]:
    def _parse(args: str, max_amount: Decimal) -> Either[str, object]:
        return Right(command)
    return _parse


PARSERS: Dict[str, Callable[[str, Decimal], Either[str, object]]] = {
    "add": _parse_add,
    "delete": _parse_delete,
    "list": _parse_list,
    "edit-expense": _parse_edit_expense,
    "set-budget": _parse_set_budget,
    "check-budget": _parse_check_budget,
    "edit-budget": _parse_edit_budget,
    "summary": _no_args(Summary()),
    "alert": _parse_alert,
    "delete-alert": _no_args(DeleteAlert()),
    "find": _parse_find,
    "help": _no_args(Help()),
    "bye": _no_args(Exit()),
}


def parse_command(line: str, max_amount: Decimal = DEFAULT_MAX_AMOUNT) -> Either[str, object]:
    line = line.strip()
    if not line:
        return Left("Please enter a command. Type 'help' to see what I can do.")
    word, _, args = line.partition(" ")
    parser = PARSERS.get(word.lower())
    if parser is None:
        return Left(f"Unknown command '{word}'. Type 'help' to see what I can do.")
    return parser(args.strip(), max_amount)

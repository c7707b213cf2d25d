from datetime import datetime
from decimal import Decimal

import pytest

from budgetcore.domain import OVERALL, Expense
from budgetcore.errors import (
    CategoryNotFound,
    InvalidAmount,
    InvalidIndex,
    InvalidInput,
    NoOverallBudget,
)
from budgetcore.events import BUDGET_ALERT, CATEGORY_NOT_FOUND, EventBus
from budgetcore.ledger import BudgetLedger

T1 = datetime(2025, 10, 5, 12, 30)
T2 = datetime(2025, 10, 6, 9, 0)
T3 = datetime(2025, 10, 7, 18, 45)


def make_ledger():
    ledger = BudgetLedger()
    ledger.set_budget("Food", 100)
    ledger.set_budget("Transport", 50)
    ledger.add_expense("Food", "12.50", "Coffee run", T1)
    ledger.add_expense("Transport", "8", "Bus", T2)
    ledger.add_expense("", "20", "Tea leaves", T3)
    return ledger


def test_new_ledger_has_overall_only():
    ledger = BudgetLedger()
    assert list(ledger.budgets) == [OVERALL]
    assert ledger.overall.limit == 0
    assert ledger.get_total_expenses() == 0


def test_add_expense_without_category_goes_to_overall():
    ledger = BudgetLedger()
    result = ledger.add_expense(None, "15.50", "Lunch", T1)
    assert result.category is None
    assert result.category_found
    assert len(ledger.overall) == 1
    assert ledger.get_total_expenses() == Decimal("15.50")


def test_add_expense_known_category_updates_both():
    ledger = make_ledger()
    food_before = len(ledger.budgets["Food"])
    overall_before = len(ledger.overall)
    total_before = ledger.get_total_expenses()

    ledger.add_expense("Food", "7.25", "Bagel", T3)

    assert len(ledger.overall) == overall_before + 1
    assert len(ledger.budgets["Food"]) == food_before + 1
    assert ledger.get_total_expenses() == total_before + Decimal("7.25")
    assert ledger.budgets["Food"].total_expenses == Decimal("19.75")


def test_add_expense_unknown_category_is_overall_only():
    ledger = make_ledger()
    counts = {name: len(b) for name, b in ledger.budgets.items()}
    notices = []
    ledger.bus.subscribe(CATEGORY_NOT_FOUND, lambda event, payload: notices.append(payload["category"]))

    result = ledger.add_expense("Gifts", 30, "Flowers", T3)

    assert not result.category_found
    assert result.category == "Gifts"
    assert notices == ["Gifts"]
    assert "Gifts" not in ledger.budgets
    assert len(ledger.overall) == counts[OVERALL] + 1
    for name in ("Food", "Transport"):
        assert len(ledger.budgets[name]) == counts[name]


def test_add_expense_invalid_amount_changes_nothing():
    ledger = make_ledger()
    with pytest.raises(InvalidAmount):
        ledger.add_expense("Food", -5, "Refund", T1)
    with pytest.raises(InvalidInput):
        ledger.add_expense("Food", 5, "  ", T1)
    assert len(ledger.overall) == 3


def test_scenario_category_created_after_first_add():
    ledger = BudgetLedger()
    first = ledger.add_expense("Food", Decimal("15.50"), "Lunch", T1)
    assert not first.category_found
    assert len(ledger.overall) == 1
    assert ledger.get_total_expenses() == Decimal("15.50")
    assert "Food" not in ledger.budgets

    created = ledger.set_budget("Food", 100)
    assert created.created
    assert ledger.budgets["Food"].limit == Decimal("100")
    assert len(ledger.budgets["Food"]) == 0

    ledger.add_expense("Food", Decimal("15.50"), "Lunch", T1)
    assert len(ledger.overall) == 2
    assert ledger.get_total_expenses() == Decimal("31.00")
    assert len(ledger.budgets["Food"]) == 1
    assert ledger.budgets["Food"].total_expenses == Decimal("15.50")


def test_set_budget_blank_targets_overall():
    ledger = BudgetLedger()
    result = ledger.set_budget("", 500)
    assert result.overall
    assert not result.created
    status = ledger.check_budget("")
    assert status.limit == Decimal("500")
    assert status.spent == 0
    assert status.remaining == Decimal("500")


def test_set_budget_replaces_existing_limit():
    ledger = make_ledger()
    result = ledger.set_budget("Food", 10)
    assert not result.created
    status = ledger.check_budget("Food")
    assert status.limit == Decimal("10")
    assert status.spent == Decimal("12.50")
    assert status.remaining == 0


def test_set_budget_negative_rejected():
    ledger = BudgetLedger()
    with pytest.raises(InvalidAmount):
        ledger.set_budget("Food", -1)
    assert "Food" not in ledger.budgets


def test_check_budget_unknown_category():
    ledger = make_ledger()
    with pytest.raises(CategoryNotFound) as info:
        ledger.check_budget("Rent")
    assert info.value.category == "Rent"
    assert "not found" in str(info.value)


def test_delete_expense_by_display_position():
    ledger = make_ledger()
    result = ledger.delete_expense(3)
    assert result.expense.description == "Coffee run"
    assert result.categories == ("Food",)
    assert len(ledger.budgets["Food"]) == 0
    assert [e.description for e in ledger.overall.expenses] == ["Bus", "Tea leaves"]


def test_delete_overall_only_expense_touches_no_category():
    ledger = make_ledger()
    result = ledger.delete_expense(1)
    assert result.expense.description == "Tea leaves"
    assert result.categories == ()
    assert len(ledger.budgets["Food"]) == 1
    assert len(ledger.budgets["Transport"]) == 1


def test_delete_removes_one_duplicate_per_category():
    ledger = BudgetLedger()
    ledger.set_budget("Food", 100)
    ledger.add_expense("Food", 5, "Snack", T1)
    ledger.add_expense("Food", 5, "Snack", T1)

    result = ledger.delete_expense(1)

    assert result.categories == ("Food",)
    assert len(ledger.overall) == 1
    assert len(ledger.budgets["Food"]) == 1


@pytest.mark.parametrize("index", [0, 4])
def test_delete_invalid_index(index):
    ledger = make_ledger()
    with pytest.raises(InvalidIndex):
        ledger.delete_expense(index)
    assert len(ledger.overall) == 3


def test_missing_overall_budget_is_reported():
    ledger = BudgetLedger()
    ledger._budgets.clear()
    with pytest.raises(NoOverallBudget):
        ledger.delete_expense(1)
    assert ledger.get_total_expenses() == 0


def test_find_expense_case_insensitive_insertion_order():
    ledger = BudgetLedger()
    ledger.add_expense("", 3, "Coffee run", T1)
    ledger.add_expense("", 2, "Tea", T2)
    matches = ledger.find_expense("coffee")
    assert [(i, e.description) for i, e in matches] == [(1, "Coffee run")]


def test_find_expense_multiple_and_none():
    ledger = make_ledger()
    assert [i for i, _ in ledger.find_expense("E")] == [1, 3]
    assert ledger.find_expense("rent") == []


def test_find_expense_blank_keyword():
    with pytest.raises(InvalidInput):
        make_ledger().find_expense("  ")


def test_list_all_expenses_newest_first_with_range():
    ledger = make_ledger()
    assert [e.description for _, e in ledger.list_all_expenses()] == ["Tea leaves", "Bus", "Coffee run"]
    assert [i for i, _ in ledger.list_all_expenses(start=T2)] == [1, 2]


def test_edit_expense_updates_overall_and_category():
    ledger = make_ledger()
    result = ledger.edit_expense(3, amount="15", description="Latte")
    assert result.before.description == "Coffee run"
    assert result.after == Expense(Decimal("15"), "Latte", T1)
    assert result.categories == ("Food",)
    assert ledger.overall.expenses[0] == result.after
    assert ledger.budgets["Food"].expenses == (result.after,)
    assert ledger.get_total_expenses() == Decimal("43")


def test_edit_expense_requires_a_change():
    ledger = make_ledger()
    with pytest.raises(InvalidInput):
        ledger.edit_expense(1)
    with pytest.raises(InvalidInput):
        ledger.edit_expense(1, timestamp="   ")


def test_edit_expense_invalid_index_and_amount():
    ledger = make_ledger()
    with pytest.raises(InvalidIndex):
        ledger.edit_expense(9, amount=1)
    with pytest.raises(InvalidAmount):
        ledger.edit_expense(1, amount=0)
    assert ledger.get_total_expenses() == Decimal("40.50")


def test_edit_budget_rename_keeps_order_and_expenses():
    ledger = make_ledger()
    result = ledger.edit_budget("Food", new_name="Groceries")
    assert result.renamed and not result.limit_changed
    assert list(ledger.budgets) == [OVERALL, "Groceries", "Transport"]
    assert ledger.budgets["Groceries"].name == "Groceries"
    assert len(ledger.budgets["Groceries"]) == 1
    ledger.add_expense("Groceries", 1, "Milk", T3)
    assert len(ledger.budgets["Groceries"]) == 2


def test_edit_budget_limit():
    ledger = make_ledger()
    result = ledger.edit_budget("Transport", new_limit="75")
    assert result.limit_changed
    assert result.old_limit == Decimal("50")
    assert ledger.check_budget("Transport").limit == Decimal("75")


def test_edit_budget_errors():
    ledger = make_ledger()
    with pytest.raises(CategoryNotFound):
        ledger.edit_budget("Rent", new_limit=1)
    with pytest.raises(InvalidInput):
        ledger.edit_budget("Food")
    with pytest.raises(InvalidInput):
        ledger.edit_budget("Food", new_name="Transport")
    with pytest.raises(InvalidInput):
        ledger.edit_budget(OVERALL, new_name="Monthly")
    with pytest.raises(InvalidAmount):
        ledger.edit_budget("Food", new_limit=-1, new_name="Groceries")
    assert "Food" in ledger.budgets
    assert ledger.budgets["Food"].limit == Decimal("100")


def test_summary_lists_every_budget_overall_first():
    summary = make_ledger().summary()
    assert list(summary) == [OVERALL, "Food", "Transport"]
    assert summary[OVERALL].spent == Decimal("40.50")
    assert summary["Food"].remaining == Decimal("87.50")
    assert summary["Transport"].count == 1


def test_alert_evaluated_after_each_add():
    bus = EventBus()
    fired = []
    bus.subscribe(BUDGET_ALERT, lambda event, payload: fired.append(payload["total"]))
    ledger = BudgetLedger(bus)
    ledger.set_alert(20)

    assert ledger.add_expense("", 15, "Lunch", T1).alert is None
    second = ledger.add_expense("", 10, "Snack", T2)
    third = ledger.add_expense("", 1, "Gum", T3)

    assert second.alert.total == Decimal("25")
    assert third.alert.total == Decimal("26")
    assert fired == [Decimal("25"), Decimal("26")]


def test_remove_alert_silences_warnings():
    ledger = BudgetLedger()
    ledger.set_alert(1)
    change = ledger.remove_alert()
    assert change.removed
    assert ledger.add_expense("", 50, "Shoes", T1).alert is None


def test_edit_expense_reevaluates_alert():
    ledger = make_ledger()
    ledger.set_alert(50)
    result = ledger.edit_expense(1, amount=100)
    assert result.alert is not None
    assert result.alert.total == Decimal("120.50")


def test_add_expense_to_overall_by_name_is_recorded_once():
    ledger = BudgetLedger()
    result = ledger.add_expense(OVERALL, "10", "Lunch", T1)
    assert result.category_found
    assert len(ledger.overall) == 1
    assert ledger.get_total_expenses() == Decimal("10")
    ledger.delete_expense(1)
    assert len(ledger.overall) == 0
    assert ledger.get_total_expenses() == 0


def test_overall_by_name_for_set_and_check_budget():
    ledger = BudgetLedger()
    result = ledger.set_budget(OVERALL, 200)
    assert result.overall
    assert not result.created
    assert result.limit == Decimal("200")
    assert list(ledger.budgets) == [OVERALL]
    ledger.add_expense(OVERALL, "15", "Lunch", T1)
    status = ledger.check_budget(OVERALL)
    assert status.spent == Decimal("15")
    assert status.remaining == Decimal("185")
    assert status.count == 1

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime

import streamlit as st

from budgetcore.domain import OVERALL
from budgetcore.errors import BudgetError
from budgetcore.events import ALL_EVENTS, Event
from budgetcore.ledger import BudgetLedger
from budgetapp import presenter
from budgetapp.charts import alert_gauge, budget_usage_figure

st.set_page_config(page_title="Budget Buddy", layout="wide")


def _record_event(event: Event, payload: dict) -> dict:
    entry = {"time": event.ts[11:19], "event": event.name, **{k: str(v) for k, v in payload.items()}}
    st.session_state.bb_event_history.append(entry)
    return entry


if "bb_ledger" not in st.session_state:
    st.session_state.bb_ledger = BudgetLedger()
    st.session_state.bb_event_history = []
    for name in ALL_EVENTS:
        st.session_state.bb_ledger.bus.subscribe(name, _record_event)

ledger: BudgetLedger = st.session_state.bb_ledger

menu = st.sidebar.radio("Menu", ["🏠 Overview", "🧾 Expenses", "💰 Budgets", "🔔 Alert", "📜 Activity"])

if menu == "🏠 Overview":
    statuses = ledger.summary()
    overall = statuses[OVERALL]
    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Budgets", len(statuses) - 1)
    with k2:
        st.metric("Expenses", overall.count)
    with k3:
        st.metric("Spent", presenter.money(overall.spent))
    with k4:
        st.metric("Remaining", presenter.money(overall.remaining))

    st.plotly_chart(budget_usage_figure(statuses), use_container_width=True)
    st.subheader("📊 Budget Summary")
    st.table(presenter.summary_table(statuses))

elif menu == "🧾 Expenses":
    st.title("🧾 Expenses")

    with st.form("add_expense", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount", min_value=0.0, step=1.0, format="%.2f")
            description = st.text_input("Description")
        with col2:
            categories = [name for name in ledger.budgets if name != OVERALL]
            category = st.selectbox("Category", ["(none)"] + categories)
            date = st.date_input("Date")
            time = st.time_input("Time")
        submitted = st.form_submit_button("Add Expense")

    if submitted:
        try:
            result = ledger.add_expense(
                None if category == "(none)" else category,
                str(amount),
                description,
                datetime.combine(date, time).replace(second=0, microsecond=0),
            )
            st.success(f"Expense Added: {result.expense}")
            if result.alert is not None:
                st.warning(
                    f"Your total expenses ({presenter.money(result.alert.total)}) have exceeded "
                    f"the alert limit of {presenter.money(result.alert.threshold)}"
                )
        except BudgetError as e:
            st.error(str(e))

    keyword = st.text_input("🔎 Find by description")
    if keyword.strip():
        rows = presenter.newest_first_rows(ledger.find_expense(keyword), len(ledger.overall))
        if rows:
            st.table(presenter.expense_table(rows))
        else:
            st.info(f"No matching expenses found for keyword: {keyword}")
    else:
        rows = ledger.list_all_expenses()
        if rows:
            st.table(presenter.expense_table(rows))
        else:
            st.info("No expenses recorded.")

    if ledger.overall.expenses:
        col_del, col_btn = st.columns([3, 1])
        with col_del:
            index = st.number_input("Expense # to delete", min_value=1, max_value=len(ledger.overall), step=1)
        with col_btn:
            if st.button("🗑 Delete"):
                try:
                    result = ledger.delete_expense(int(index))
                    st.success(f"Deleted {result.expense}")
                    st.rerun()
                except BudgetError as e:
                    st.error(str(e))

elif menu == "💰 Budgets":
    st.title("💰 Budgets")
    with st.form("set_budget", clear_on_submit=True):
        name = st.text_input("Category (leave empty for Overall)")
        limit = st.number_input("Limit", min_value=0.0, step=10.0, format="%.2f")
        if st.form_submit_button("Set Budget"):
            try:
                result = ledger.set_budget(name, str(limit))
                st.success(presenter.budget_set(result).splitlines()[1])
            except BudgetError as e:
                st.error(str(e))

    for status in ledger.summary().values():
        st.metric(
            f"Budget: {status.name}",
            f"{presenter.money(status.spent)} / {presenter.money(status.limit)}",
            f"{presenter.money(status.remaining)} remaining",
        )
        if status.limit > 0:
            st.progress(min(1.0, float(status.spent / status.limit)))

elif menu == "🔔 Alert":
    st.title("🔔 Alert")
    threshold = st.number_input(
        "Alert threshold",
        min_value=0.0,
        value=float(ledger.alert.amount),
        step=10.0,
        help="You will be warned when total expenses exceed this amount. 0 disables the alert.",
    )
    if st.button("Save Alert"):
        change = ledger.set_alert(str(threshold))
        st.success(presenter.alert_changed(change).splitlines()[1])

    st.plotly_chart(
        alert_gauge(float(ledger.get_total_expenses()), float(ledger.alert.amount)),
        use_container_width=True,
    )

elif menu == "📜 Activity":
    st.title("📜 Activity")
    history = st.session_state.bb_event_history
    if history:
        st.dataframe(list(reversed(history)), use_container_width=True)
    else:
        st.info("Nothing has happened yet.")

from typing import Dict

import plotly.graph_objects as go

from budgetcore.results import BudgetStatus

from budgetapp.presenter import summary_table


def budget_usage_figure(statuses: Dict[str, BudgetStatus]) -> go.Figure:
    df = summary_table(statuses)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["Category"], y=df["Spent"], name="Spent"))
    fig.add_trace(go.Bar(x=df["Category"], y=df["Limit"], name="Limit"))
    fig.update_layout(
        barmode="group",
        title="Spent vs Limit",
        template="plotly_dark",
        margin=dict(t=40, b=10, l=10, r=10),
    )
    return fig


def alert_gauge(total: float, threshold: float) -> go.Figure:
    upper = max(total, threshold) * 1.2 or 1
    gauge = {"axis": {"range": [0, upper]}}
    if threshold > 0:
        gauge["threshold"] = {"line": {"color": "red", "width": 4}, "value": threshold}
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=total,
        title={"text": "Total Expenses"},
        gauge=gauge,
    ))
    fig.update_layout(template="plotly_dark", height=260, margin=dict(t=40, b=10, l=10, r=10))
    return fig

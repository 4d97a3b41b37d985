"""Plotly figure builders for engine outputs.

Each function accepts the records returned by the analytics and budget
modules and returns a ``plotly.graph_objects.Figure``.  Nothing is shown
or written; the host application decides how to render the figure.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .budget_calculator import STATUS_COLORS
from .config import get_currency_symbol
from .models import BudgetInsight, BudgetStatus, CategoryComparison, DailySpending


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_spending_trend_chart(daily: Sequence[DailySpending], title: str | None = None) -> go.Figure:
    """Line chart of spending per day.

    Parameters
    ----------
    daily : sequence of DailySpending
        Output of :func:`budgetwise.analytics.get_daily_spending_data`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Line chart with one point per day.
    """
    if not daily:
        return _empty_figure()
    df = pd.DataFrame([row.to_dict() for row in daily])
    fig = px.line(df, x="date", y="amount", markers=True)
    fig.update_layout(
        title=title or "Daily spending",
        xaxis_title="Date",
        yaxis_title=f"Amount ({get_currency_symbol()})",
    )
    return fig


def create_budget_utilization_chart(insights: Sequence[BudgetInsight], title: str | None = None) -> go.Figure:
    """Horizontal bars of budget utilization, coloured by status.

    A dashed line marks 100% so exceeded categories stand out.
    """
    if not insights:
        return _empty_figure()
    fig = go.Figure(
        go.Bar(
            x=[insight.utilization_percentage for insight in insights],
            y=[insight.category_name for insight in insights],
            orientation="h",
            marker_color=[STATUS_COLORS[insight.status] for insight in insights],
            text=[f"{insight.utilization_percentage:.1f}%" for insight in insights],
            textposition="auto",
        )
    )
    fig.add_vline(x=100, line_dash="dash", line_color=STATUS_COLORS[BudgetStatus.EXCEEDED])
    fig.update_layout(
        title=title or "Budget utilization",
        xaxis_title="Percent of budget used",
        yaxis_title="Category",
        yaxis={"autorange": "reversed"},
    )
    return fig


def create_category_comparison_chart(
    rows: Sequence[CategoryComparison],
    title: str | None = None,
) -> go.Figure:
    """Grouped bars comparing current and previous period spend per category."""
    if not rows:
        return _empty_figure()
    df = pd.DataFrame([row.to_dict() for row in rows])
    long = df.melt(
        id_vars="category",
        value_vars=["previous_amount", "current_amount"],
        var_name="Period",
        value_name="Amount",
    )
    long["Period"] = long["Period"].map({"previous_amount": "Previous", "current_amount": "Current"})
    fig = px.bar(long, x="category", y="Amount", color="Period", barmode="group")
    fig.update_layout(
        title=title or "Spending by category",
        xaxis_title="Category",
        yaxis_title=f"Amount ({get_currency_symbol()})",
    )
    return fig

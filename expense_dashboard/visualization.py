"""Plotly visualisation helpers for the expense dashboard.

Each function accepts the output of the corresponding function in
:mod:`aggregation` and returns a `plotly.graph_objects.Figure` that
Streamlit renders via ``st.plotly_chart``.  The ``dark_mode`` flag only
changes colours; the data shown is identical in both themes.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .aggregation import BudgetStatus, DailySpend, weekly_series_frame
from .formatting import PROGRESS_COLORS, category_color
from .models import Category

THEMES = {
    True: {"line": "#818cf8", "grid": "#4b5563", "axis": "#9ca3af", "paper": "#1f2937", "font": "#ffffff"},
    False: {"line": "#4f46e5", "grid": "#e5e7eb", "axis": "#6b7280", "paper": "#ffffff", "font": "#111827"},
}


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def _apply_theme(fig: go.Figure, dark_mode: bool) -> go.Figure:
    theme = THEMES[bool(dark_mode)]
    fig.update_layout(
        paper_bgcolor=theme["paper"],
        plot_bgcolor=theme["paper"],
        font_color=theme["font"],
    )
    return fig


def create_weekly_spend_chart(
    series: Sequence[DailySpend], dark_mode: bool = True, title: str | None = None
) -> go.Figure:
    """Line chart of the trailing-week series.

    Parameters
    ----------
    series : sequence of DailySpend
        Output of :func:`aggregation.trailing_week_series`.
    dark_mode : bool
        Use the dark palette.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Line chart with one marker per day.
    """
    if not series:
        return _empty_figure()
    df = weekly_series_frame(series)
    theme = THEMES[bool(dark_mode)]
    fig = px.line(df, x="Day", y="Amount", markers=True)
    fig.update_traces(line_color=theme["line"], line_width=3, hovertemplate="%{x}: $%{y:,.2f}")
    fig.update_layout(
        title=title or "Weekly Spending",
        xaxis_title="Day",
        yaxis_title="Amount",
    )
    fig.update_xaxes(gridcolor=theme["grid"], color=theme["axis"], categoryorder="array", categoryarray=list(df["Day"]))
    fig.update_yaxes(gridcolor=theme["grid"], color=theme["axis"])
    return _apply_theme(fig, dark_mode)


def create_category_pie_chart(
    totals: Dict[Category, float], dark_mode: bool = True, title: str | None = None
) -> go.Figure:
    """Donut chart of spend per category.

    Parameters
    ----------
    totals : dict
        Output of :func:`aggregation.category_totals`.
    dark_mode : bool
        Use the dark palette.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Donut chart coloured with the category colour table.
    """
    if not totals:
        return _empty_figure()
    df = pd.DataFrame(
        [(str(category), value) for category, value in totals.items()],
        columns=["Category", "Amount"],
    )
    fig = px.pie(
        df,
        names="Category",
        values="Amount",
        hole=0.5,
        color="Category",
        color_discrete_map={name: category_color(name) for name in df["Category"]},
    )
    fig.update_traces(textinfo="percent", hovertemplate="%{label}: $%{value:,.2f}")
    fig.update_layout(title=title or "Expense Categories")
    return _apply_theme(fig, dark_mode)


def create_budget_gauge(status: BudgetStatus, dark_mode: bool = True) -> go.Figure:
    """Gauge of spend against the monthly cap, coloured by budget level."""
    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=status.percent_used,
            number={"suffix": "%"},
            gauge={
                "axis": {"range": [0, 100]},
                "bar": {"color": PROGRESS_COLORS[status.level]},
            },
            title={"text": "Budget used"},
        )
    )
    return _apply_theme(fig, dark_mode)

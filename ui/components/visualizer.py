"""
PropertyInsights — Chart Builders
---------------------------------

Purpose
-------
Reusable helpers returning Plotly figures that Streamlit pages display:
- Expense breakdown pie (income category excluded).
- Asset appreciation timeline with the capital-recovery marker and the
  projected trend segment.

Design
------
- Pure functions, no Streamlit imports (UI calls these).
- No data access here: records and results are provided by the caller.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from analytics.aggregation import BreakdownRow
from analytics.breakeven import BREAKEVEN_LABEL, BreakevenResult, ValuePoint
from core.formatting import fmt_currency, fmt_month_year, to_datetime
from ui.components.theme import (
    AMBER,
    BORDER2,
    GOLD,
    MINT,
    ORANGE,
    PIE_COLORS,
    SKY,
    SURFACE,
    TEXT2,
    TEXT3,
)


def _base_layout(fig: go.Figure, height: int) -> go.Figure:
    fig.update_layout(
        height=height,
        margin=dict(l=10, r=10, t=10, b=10),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=TEXT2, size=11),
        hoverlabel=dict(bgcolor=SURFACE, bordercolor=BORDER2),
    )
    return fig


# --------------------------------------------------------------------------- #
# Expense pie
# --------------------------------------------------------------------------- #
def build_expense_pie(rows: Sequence[BreakdownRow]) -> Optional[go.Figure]:
    """
    Pie of absolute expense totals by type.

    Returns None when there is nothing to plot.
    """
    rows = [r for r in rows if r.total > 0]
    if not rows:
        return None

    data = pd.DataFrame({"Type": [r.item_type for r in rows], "Total": [r.total for r in rows]})
    fig = px.pie(
        data,
        names="Type",
        values="Total",
        color_discrete_sequence=PIE_COLORS,
    )
    fig.update_traces(
        marker=dict(line=dict(color=SURFACE, width=2)),
        hovertemplate="%{label}<br>-£%{value:,.0f}<extra></extra>",
        textinfo="percent",
    )
    fig.update_layout(legend=dict(orientation="v", x=1.02, y=0.5, font=dict(color=TEXT2)))
    return _base_layout(fig, height=300)


# --------------------------------------------------------------------------- #
# Appreciation timeline
# --------------------------------------------------------------------------- #
def _point_colors(n: int) -> List[str]:
    """First point blue, last point green, the rest orange."""
    return [SKY if i == 0 else MINT if i == n - 1 else ORANGE for i in range(n)]


def build_appreciation_figure(
    points: Sequence[ValuePoint],
    breakeven: Optional[BreakevenResult] = None,
    target: Optional[float] = None,
) -> Optional[go.Figure]:
    """
    Line chart of known value milestones.

    When a breakeven result is given:
    - the target is drawn as a dotted horizontal line,
    - an achieved breakeven gets a marker on the known line,
    - a projected one adds a dashed segment through the projected points.
    """
    if not points:
        return None

    xs = [to_datetime(p.date) for p in points]
    ys = [p.value for p in points]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=xs,
            y=ys,
            mode="lines+markers",
            name="Property Value",
            line=dict(color=ORANGE, width=2.5, shape="spline", smoothing=0.6),
            fill="tozeroy",
            fillcolor="rgba(204,102,0,0.08)",
            marker=dict(size=10, color=_point_colors(len(points)), line=dict(color="#111", width=2)),
            customdata=[[p.label, fmt_month_year(p.date)] for p in points],
            hovertemplate="%{customdata[0]}<br>%{customdata[1]}<br>£%{y:,.0f}<extra></extra>",
        )
    )

    if target is not None:
        fig.add_hline(
            y=target,
            line=dict(color=GOLD, width=1, dash="dot"),
            annotation_text=f"Cash recovery target {fmt_currency(target)}",
            annotation_font_color=GOLD,
            annotation_position="top left",
        )

    if breakeven is not None and breakeven.is_determined and breakeven.date is not None:
        if breakeven.is_projected:
            proj = [points[-1], *breakeven.projected_points]
            fig.add_trace(
                go.Scatter(
                    x=[to_datetime(p.date) for p in proj],
                    y=[p.value for p in proj],
                    mode="lines+markers",
                    name="Projected trend",
                    line=dict(color=AMBER, width=2, dash="dash"),
                    marker=dict(size=[0, 11, 7], color=AMBER, symbol=["circle", "star", "circle"]),
                    customdata=[[p.label] for p in proj],
                    hovertemplate="%{customdata[0]}<br>%{x|%b %Y}<br>£%{y:,.0f}<extra></extra>",
                )
            )
        else:
            fig.add_trace(
                go.Scatter(
                    x=[breakeven.date],
                    y=[breakeven.target],
                    mode="markers",
                    name=BREAKEVEN_LABEL,
                    marker=dict(size=13, color=MINT, symbol="star", line=dict(color="#111", width=1)),
                    hovertemplate=f"{BREAKEVEN_LABEL}<br>%{{x|%b %Y}}<br>£%{{y:,.0f}}<extra></extra>",
                )
            )

    fig.update_layout(showlegend=False)
    fig.update_xaxes(showgrid=True, gridcolor="#222", tickformat="%b %Y", tickfont=dict(color=TEXT3))
    fig.update_yaxes(
        showgrid=True,
        gridcolor="#222",
        tickprefix="£",
        tickformat="~s",
        tickfont=dict(color=TEXT3),
    )
    return _base_layout(fig, height=260)


# --------------------------------------------------------------------------- #
# End of File
# --------------------------------------------------------------------------- #

"""
PropertyInsights — Portfolio Performance
----------------------------------------
Main entrypoint for the PropertyInsights multipage app.

Sections
--------
- Header with brand and as-of stamp
- Filter bar (property, date range, clear all, transaction count)
- Property Analysis panel
- P&L KPI cards, breakdown by type and expense pie
- Transaction ledger with column filters and sort
"""

import os
import sys

import pandas as pd
import streamlit as st

# --- Ensure the project root is in Python's import path ---
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from analytics.aggregation import (
    breakdown_by_type,
    expense_breakdown,
    filter_transactions,
    sort_transactions,
    summarize,
)
from core.formatting import fmt_as_of, fmt_currency, fmt_expense, fmt_pct, fmt_signed_currency
from core.logging_setup import configure_logging
from core.metadata import __brand__
from core.ui_config import DATA_SOURCE, REPORT_DATE
from core.ui_helpers import get_snapshot, refresh_snapshot
from ui.components.backend_status import render_status_bar
from ui.components.cards import kpi_card, section_title
from ui.components.ledger import render_ledger
from ui.components.property_panel import render_property_panel
from ui.components.state import (
    END_KEY,
    PROPERTY_KEY,
    START_KEY,
    clear_global_filters,
    init_state,
    read_state,
)
from ui.components.theme import GOLD, GREEN, RED, TEXT2, TEXT3
from ui.components.visualizer import build_expense_pie

configure_logging()

# ===============================================================
# Page Configuration
# ===============================================================
st.set_page_config(page_title=f"Portfolio Performance — {__brand__}", page_icon="🏠", layout="wide")

with st.spinner("Loading portfolio data..."):
    snapshot = get_snapshot()

init_state()
state = read_state()
render_status_bar()

# ===============================================================
# Header
# ===============================================================
left, right = st.columns([3, 1])
with left:
    st.markdown(
        f"<div style='font-size:11px;color:{GOLD};letter-spacing:3px;text-transform:uppercase'>"
        f"{__brand__}</div>",
        unsafe_allow_html=True,
    )
    st.title("Portfolio Performance")
with right:
    cities = sorted({p.city for p in snapshot.properties if p.city})
    st.markdown(
        f"<div style='text-align:right;color:{TEXT3};font-size:11px;letter-spacing:2px'>"
        f"{fmt_as_of(REPORT_DATE)}<br>"
        f"<span style='color:{TEXT2}'>{len(snapshot.properties)} Properties"
        f"{' · ' + ' & '.join(cities) if cities else ''}</span></div>",
        unsafe_allow_html=True,
    )
    st.button("↻ Refresh data", on_click=refresh_snapshot, use_container_width=True)

if snapshot.is_empty:
    st.warning("No portfolio data available. Check the data source configuration.")

# ===============================================================
# Filter bar
# ===============================================================
labels = {"": "All Properties", **{p.property_id: p.label for p in snapshot.properties}}

filters = st.container(border=True)
f1, f2, f3, f4, f5 = filters.columns([3, 2, 2, 1, 1])
f1.selectbox("Property", options=list(labels), format_func=labels.get, key=PROPERTY_KEY)
f2.date_input("From", key=START_KEY, format="DD/MM/YYYY")
f3.date_input("To", key=END_KEY, format="DD/MM/YYYY")
f4.markdown(" ")
f4.button("Clear all", on_click=clear_global_filters, disabled=not state.has_global_filter)

filtered = filter_transactions(snapshot.transactions, state.ledger_filters(snapshot))
f5.metric("Transactions", len(filtered))

# ===============================================================
# Property Analysis
# ===============================================================
if snapshot.properties:
    with st.container(border=True):
        render_property_panel(snapshot, state.property_id)

# ===============================================================
# P&L
# ===============================================================
pnl = summarize(filtered)
k1, k2, k3 = st.columns(3)
with k1:
    kpi_card("Rental Income", fmt_currency(pnl.income), f"{pnl.count} transactions in view", GREEN)
with k2:
    kpi_card("Total Expenses", fmt_expense(pnl.expenses), "All non-income items", RED)
with k3:
    kpi_card(
        "Net Income",
        fmt_signed_currency(pnl.net),
        f"Net margin {fmt_pct(pnl.net_margin_pct)}",
        GREEN if pnl.net >= 0 else RED,
    )

st.markdown(" ")
breakdown = breakdown_by_type(filtered)
b1, b2 = st.columns([3, 2])
with b1:
    section_title("Breakdown by Type")
    if breakdown:
        table = pd.DataFrame(
            {
                "Type": [r.item_type for r in breakdown],
                "Total": [fmt_signed_currency(r.total) for r in breakdown],
            }
        )
        st.dataframe(table, use_container_width=True, hide_index=True)
    else:
        st.info("No transactions in view.")
with b2:
    section_title("Expense Breakdown")
    fig = build_expense_pie(expense_breakdown(breakdown))
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.caption("No expenses in view.")

# ===============================================================
# Ledger
# ===============================================================
with st.container(border=True):
    render_ledger(snapshot.transactions, sort_transactions(filtered, state.sort), state.sort)

# ===============================================================
# Footer
# ===============================================================
source_name = "SQLite" if DATA_SOURCE == "sqlite" else "Supabase"
st.markdown("---")
st.markdown(
    f"<div style='display:flex;justify-content:space-between;color:{TEXT3};font-size:11px;"
    f"letter-spacing:2px'><span>{__brand__.upper()} · PORTFOLIO ANALYTICS</span>"
    f"<span>Data sourced from {source_name} · {len(snapshot.transactions)} total transactions"
    f"</span></div>",
    unsafe_allow_html=True,
)

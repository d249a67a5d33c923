"""
Transaction ledger
------------------

Per-column multi-select filters, a sort control and the ledger table with
its filtered total. Filter options always come from the full transaction
list so that a selection never hides its own alternatives.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import streamlit as st

from analytics.aggregation import (
    AMOUNT,
    LEDGER_COLUMNS,
    SortConfig,
    filtered_total,
    is_income,
    unique_values,
)
from core.formatting import fmt_date, fmt_signed_currency
from core.records import Transaction
from ui.components.cards import section_title
from ui.components.state import SORT_KEY, click_sort, column_widget_key
from ui.components.theme import GREEN, RED, TEXT3


def render_column_filters(all_rows: Sequence[Transaction]) -> None:
    """One multi-select per ledger column; values land in ``st.session_state``."""
    cols = st.columns(len(LEDGER_COLUMNS))
    for col, (key, header) in zip(cols, LEDGER_COLUMNS.items()):
        col.multiselect(
            header,
            options=unique_values(all_rows, key),
            key=column_widget_key(key),
            placeholder="All",
        )


def _sort_label(key: str, sort: Optional[SortConfig]) -> str:
    header = LEDGER_COLUMNS[key]
    if sort is None or sort.key != key:
        return header
    return f"{header} {'▼' if sort.descending else '▲'}"


def render_sort_control(sort: Optional[SortConfig]) -> None:
    """Header buttons: click once for ascending, again to flip direction."""
    cols = st.columns(len(LEDGER_COLUMNS))
    for col, key in zip(cols, LEDGER_COLUMNS):
        col.button(
            _sort_label(key, sort),
            key=f"{SORT_KEY}_{key}",
            on_click=click_sort,
            args=(key,),
            use_container_width=True,
        )


def ledger_frame(rows: Sequence[Transaction]) -> pd.DataFrame:
    """Display table for the ledger (formatted date, raw amount)."""
    return pd.DataFrame(
        {
            LEDGER_COLUMNS["date"]: [fmt_date(t.date) for t in rows],
            LEDGER_COLUMNS["property_address"]: [t.property_address for t in rows],
            LEDGER_COLUMNS["description"]: [t.description for t in rows],
            LEDGER_COLUMNS["item_type"]: [t.item_type for t in rows],
            LEDGER_COLUMNS[AMOUNT]: [t.amount for t in rows],
        }
    )


def render_ledger(
    all_rows: Sequence[Transaction],
    rows: Sequence[Transaction],
    sort: Optional[SortConfig],
) -> None:
    """
    Ledger section.

    Parameters
    ----------
    all_rows : sequence of Transaction
        Unfiltered transactions (filter options).
    rows : sequence of Transaction
        Filtered and sorted transactions to display.
    sort : SortConfig or None
        Active sort, shown on the header buttons.
    """
    section_title("Transaction Ledger")
    render_column_filters(all_rows)
    render_sort_control(sort)

    if not rows:
        st.info("No transactions match the current filters.")
        return

    table = ledger_frame(rows)
    income_flags = [is_income(t) for t in rows]

    def _amount_tone(col: pd.Series) -> list[str]:
        if col.name != LEDGER_COLUMNS[AMOUNT]:
            return [""] * len(col)
        return [f"color: {GREEN if inc else RED}" for inc in income_flags]

    styled = table.style.apply(_amount_tone, axis=0).format(
        {LEDGER_COLUMNS[AMOUNT]: fmt_signed_currency}
    )
    st.dataframe(styled, use_container_width=True, hide_index=True, height=420)

    total = filtered_total(rows)
    st.markdown(
        f"<div style='text-align:right;color:{TEXT3};font-size:12px'>"
        f"{len(rows)} records · Filtered total "
        f"<b style='color:{GREEN if total >= 0 else RED}'>{fmt_signed_currency(total)}</b></div>",
        unsafe_allow_html=True,
    )

"""
Dashboard state
---------------

The page keeps every user choice (property, date range, column filters,
sort) in one explicit ``DashboardState`` built from widget values on each
rerun. Pure analytics functions receive it; nothing else is mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Optional

import streamlit as st

from analytics.aggregation import LEDGER_COLUMNS, LedgerFilters, SortConfig, toggle_sort
from analytics.snapshot import PortfolioSnapshot

PROPERTY_KEY = "selected_property_id"
START_KEY = "start_date"
END_KEY = "end_date"
SORT_KEY = "ledger_sort"
COLUMN_KEY_PREFIX = "ledger_filter_"


@dataclass(frozen=True)
class DashboardState:
    property_id: str = ""
    start: Optional[date] = None
    end: Optional[date] = None
    columns: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    sort: Optional[SortConfig] = None

    @property
    def has_global_filter(self) -> bool:
        return bool(self.property_id or self.start or self.end)

    def ledger_filters(self, snapshot: PortfolioSnapshot) -> LedgerFilters:
        selected = snapshot.property_by_id(self.property_id)
        return LedgerFilters(
            property_key=selected.address_key if selected else None,
            start=self.start,
            end=self.end,
            columns=self.columns,
        )


def column_widget_key(column: str) -> str:
    return f"{COLUMN_KEY_PREFIX}{column}"


def init_state() -> None:
    """Seed widget defaults once per session (no date range, all properties)."""
    st.session_state.setdefault(PROPERTY_KEY, "")
    st.session_state.setdefault(START_KEY, None)
    st.session_state.setdefault(END_KEY, None)


def read_state() -> DashboardState:
    """Collect the current widget values from ``st.session_state``."""
    ss = st.session_state
    columns = {
        col: frozenset(ss.get(column_widget_key(col)) or ())
        for col in LEDGER_COLUMNS
    }
    return DashboardState(
        property_id=ss.get(PROPERTY_KEY) or "",
        start=ss.get(START_KEY),
        end=ss.get(END_KEY),
        columns={c: v for c, v in columns.items() if v},
        sort=ss.get(SORT_KEY),
    )


def clear_global_filters() -> None:
    """'Clear all' button callback: property and date range."""
    st.session_state[PROPERTY_KEY] = ""
    st.session_state[START_KEY] = None
    st.session_state[END_KEY] = None


def click_sort(column: str) -> None:
    """Sort header callback."""
    st.session_state[SORT_KEY] = toggle_sort(st.session_state.get(SORT_KEY), column)

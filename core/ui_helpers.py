"""
core/ui_helpers.py
------------------
Shared Streamlit helpers: cached snapshot loading and refresh.
"""

from __future__ import annotations

import streamlit as st

from analytics.snapshot import PortfolioSnapshot, load_snapshot
from core.ui_config import SNAPSHOT_TTL


@st.cache_data(ttl=SNAPSHOT_TTL, show_spinner=False)
def get_snapshot() -> PortfolioSnapshot:
    """
    Last-fetched portfolio snapshot.

    Reruns triggered by filters, sorting or property selection reuse it;
    the tables are fetched again only after SNAPSHOT_TTL seconds or an
    explicit refresh.
    """
    return load_snapshot()


def refresh_snapshot() -> None:
    get_snapshot.clear()


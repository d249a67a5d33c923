"""
KPI cards and stat rows rendered as small HTML blocks.
"""

from __future__ import annotations

from html import escape
from typing import Optional

import streamlit as st

from ui.components.theme import BORDER, GOLD, SURFACE, TEXT, TEXT3


def kpi_card(label: str, value: str, sub: Optional[str] = None, color: str = GOLD) -> None:
    """Color-coded KPI card (left accent border, big value, optional subline)."""
    sub_html = (
        f'<div style="font-size:11px;color:{TEXT3};margin-top:8px">{sub}</div>' if sub else ""
    )
    st.markdown(
        f"""
        <div style="background:{SURFACE};border:1px solid {BORDER};border-left:3px solid {color};
                    border-radius:4px;padding:18px 22px;">
          <div style="font-size:10px;color:{TEXT3};text-transform:uppercase;letter-spacing:2px;
                      margin-bottom:10px;font-weight:600">{escape(label)}</div>
          <div style="font-size:30px;font-weight:700;color:{color};line-height:1">{escape(value)}</div>
          {sub_html}
        </div>
        """,
        unsafe_allow_html=True,
    )


def stat_row(label: str, value: str) -> None:
    st.markdown(
        f"""
        <div style="display:flex;justify-content:space-between;padding:7px 0;border-bottom:1px solid #222">
          <span style="color:#888;font-size:13px">{escape(label)}</span>
          <span style="font-size:13px;font-weight:500;color:{TEXT}">{escape(value)}</span>
        </div>
        """,
        unsafe_allow_html=True,
    )


def section_title(text: str) -> None:
    st.markdown(
        f'<div style="font-size:12px;color:{GOLD};text-transform:uppercase;letter-spacing:2px;'
        f'font-weight:600;margin:8px 0 12px">{escape(text)}</div>',
        unsafe_allow_html=True,
    )

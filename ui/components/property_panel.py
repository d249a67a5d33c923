"""
Property Analysis panel
-----------------------

Per-property KPI cards, asset appreciation timeline with the
capital-recovery marker, investment / running-cost / valuation summaries,
capital transactions and scenarios.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from analytics.breakeven import BreakevenResult
from analytics.property_metrics import PropertyAnalysis, analyze_property, cashflow_tone, roi_tone
from analytics.snapshot import PortfolioSnapshot
from core.formatting import (
    fmt_currency,
    fmt_expense,
    fmt_month_year,
    fmt_pct,
    fmt_rate,
    fmt_signed_currency,
)
from ui.components.cards import kpi_card, section_title, stat_row
from ui.components.theme import SKY, TONE_COLORS, VIOLET
from ui.components.visualizer import build_appreciation_figure


def _breakeven_caption(result: BreakevenResult) -> str:
    if result.is_projected:
        return (
            f"Capital recovery projected for **{fmt_month_year(result.date)}** "
            f"at the current trend ({fmt_currency(result.rate_per_year or 0)} / year)."
        )
    if result.achieved:
        return f"Capital recovered **{fmt_month_year(result.date)}**."
    return "Capital recovery date undetermined: not enough upward trend in the timeline."


def _render_kpis(a: PropertyAnalysis) -> None:
    m, p = a.metrics, a.property
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kpi_card(
            "ROI on Cash",
            fmt_pct(m.roi_pct),
            f"{fmt_currency(m.net_cash_invested)} net invested",
            TONE_COLORS[roi_tone(m.roi_pct)],
        )
    with c2:
        kpi_card("Equity", fmt_currency(m.equity), f"{fmt_currency(p.market_value_est)} market value", SKY)
    with c3:
        kpi_card("Gross Yield", fmt_pct(m.gross_yield_pct), f"Net yield {fmt_pct(m.net_yield_pct)}", VIOLET)
    with c4:
        kpi_card(
            "Monthly Cashflow",
            fmt_currency(m.monthly_cashflow),
            f"{fmt_currency(m.annual_cashflow)} / year",
            TONE_COLORS[cashflow_tone(m.monthly_cashflow)],
        )


def _render_timeline(a: PropertyAnalysis) -> None:
    p = a.property
    section_title("Asset Appreciation")
    st.caption(p.label)

    points = a.value_points
    cols = st.columns(len(points) + (1 if a.appreciation else 0))
    for col, point in zip(cols, points):
        col.metric(point.label or "Valuation", fmt_currency(point.value))
        col.caption(fmt_month_year(point.date))
    if a.appreciation:
        cols[-1].metric(
            "Total Appreciation",
            fmt_signed_currency(a.appreciation.absolute),
            f"{a.appreciation.pct:+.1f}% from purchase",
        )

    fig = build_appreciation_figure(points, a.breakeven, a.target)
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)
    if a.breakeven is not None:
        st.markdown(_breakeven_caption(a.breakeven))


def _render_details(a: PropertyAnalysis) -> None:
    p, m = a.property, a.metrics
    col1, col2, col3 = st.columns(3)

    with col1:
        section_title("Investment Summary")
        stat_row("Purchase price", fmt_currency(p.purchase_price))
        stat_row("Deposit (Phase 1)", f"{fmt_currency(p.cash_deposit_phase1)} ({p.deposit_pct_phase1 * 100:.0f}%)")
        stat_row("Stamp duty", fmt_currency(p.stamp_duty))
        stat_row("Solicitor & mortgage fees", fmt_currency(p.solicitor_fees))
        stat_row("Agent fee", fmt_currency(p.agent_fee))
        stat_row("Renovation cost", fmt_currency(p.renovation_cost))
        stat_row("Renovation mgmt fee", fmt_currency(p.renovation_mgmt_fee))
        stat_row("Total cash deployed", fmt_currency(m.total_cash_invested))
        stat_row("Equity released", fmt_currency(p.equity_release))
        stat_row("Net cash in deal", fmt_currency(m.net_cash_invested))

    with col2:
        section_title("Income & Running Costs (Phase 2)")
        stat_row("Beds", str(p.beds_phase2))
        stat_row("Annual rent", fmt_currency(p.annual_rent_phase2))
        stat_row("Management", fmt_expense(p.management_phase2))
        stat_row("Maintenance provision", fmt_expense(p.provision_costs_phase2))
        stat_row("Void provision", fmt_expense(p.provision_voids_phase2))
        if p.bills_phase2 > 0:
            stat_row("Bills", fmt_expense(p.bills_phase2))
        stat_row("Mortgage interest (p.a.)", fmt_expense(m.annual_mortgage_interest))
        stat_row("Mortgage rate", fmt_rate(p.mortgage_rate_phase2))
        stat_row("Annual cashflow", fmt_currency(m.annual_cashflow))
        stat_row("Monthly cashflow", fmt_currency(m.monthly_cashflow))

    with col3:
        section_title("Valuation & Equity")
        stat_row("Base Case Revaluation", fmt_currency(p.revaluation_estimate))
        stat_row("Market Value Estimate", fmt_currency(p.market_value_est))
        stat_row("Basis", p.market_value_basis or "—")
        stat_row("LTV (Phase 2)", fmt_pct(m.ltv_pct, 0))
        stat_row("Outstanding mortgage", fmt_currency(m.outstanding_mortgage))
        stat_row("Equity (vs market value)", fmt_currency(m.equity))
        if p.notes_phase2:
            stat_row("Notes", p.notes_phase2)

        if a.capital_transactions:
            section_title("Capital Transactions")
            for t in a.capital_transactions:
                stat_row(f"{t.date.isoformat()} · {t.description}", fmt_signed_currency(t.amount))


def _render_scenarios(a: PropertyAnalysis) -> None:
    if not a.scenarios:
        return
    section_title("Scenarios")
    table = pd.DataFrame(
        [
            {
                "Scenario": s.label,
                "Base Case Revaluation": fmt_currency(s.revaluation_estimate),
                "Equity Release": fmt_currency(s.equity_release),
                "Mortgage Rate": fmt_rate(s.mortgage_rate_phase2),
                "Annual Rent": fmt_currency(s.annual_rent_phase2),
                "Cashflow/mo": fmt_currency(s.monthly_cashflow),
                "ROI": fmt_pct(s.roi_pct),
            }
            for s in a.scenarios
        ]
    )

    tones = {
        "Cashflow/mo": [TONE_COLORS[cashflow_tone(s.annual_cashflow)] for s in a.scenarios],
        "ROI": [TONE_COLORS[roi_tone(s.roi_pct)] for s in a.scenarios],
    }

    def _tone(col: pd.Series) -> list[str]:
        colors = tones.get(col.name)
        return [f"color: {c}" for c in colors] if colors else [""] * len(col)

    styled = table.style.apply(_tone, axis=0)
    st.dataframe(styled, use_container_width=True, hide_index=True)


def render_property_panel(snapshot: PortfolioSnapshot, property_id: str) -> None:
    """Full Property Analysis panel for ``property_id`` (falls back to the first property)."""
    if not snapshot.properties:
        st.info("No property data available.")
        return

    prop = snapshot.property_by_id(property_id) or snapshot.properties[0]

    header, link = st.columns([4, 1])
    header.subheader(f"Property Analysis — {prop.label}")
    if prop.property_link:
        link.markdown(f"[View listing ↗]({prop.property_link})")

    analysis = analyze_property(
        prop,
        snapshot.capital_transactions,
        snapshot.scenarios,
        snapshot.valuations,
    )

    _render_kpis(analysis)
    st.markdown(" ")
    with st.container(border=True):
        _render_timeline(analysis)
    _render_details(analysis)
    _render_scenarios(analysis)


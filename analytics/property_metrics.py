"""
analytics/property_metrics.py
-----------------------------

Per-property investment analytics for the Property Analysis panel.

Pure functions over ``core.records`` models:
- cash invested / net cash in deal,
- phase-2 mortgage, running costs, cashflow, ROI, equity and yields,
- scenario re-evaluation with the same formulas,
- the appreciation timeline and its capital-recovery (breakeven) target.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from analytics.breakeven import BreakevenResult, ValuePoint, estimate_breakeven
from core.records import CapitalTransaction, Property, Scenario, Valuation
from core.ui_config import PORTFOLIO_AS_OF

MARKET_ESTIMATE_LABEL = "Market Value Estimate"
PURCHASE_LABEL = "Purchase Price"
REVALUATION_LABEL = "Base Case Revaluation"

ROI_GOOD_PCT = 10.0


# --------------------------------------------------------------------------- #
# Core metrics
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class PropertyMetrics:
    total_cash_invested: float
    net_cash_invested: float
    outstanding_mortgage: float
    annual_mortgage_interest: float
    annual_operating_costs: float
    annual_cashflow: float
    monthly_cashflow: float
    roi_pct: float
    equity: float
    gross_yield_pct: float
    net_yield_pct: float
    ltv_pct: float


def total_cash_invested(p: Property) -> float:
    """Deposit + purchase fees + renovation, i.e. all cash deployed."""
    return (
        p.cash_deposit_phase1
        + p.stamp_duty
        + p.solicitor_fees
        + p.agent_fee
        + p.renovation_cost
        + p.renovation_mgmt_fee
    )


def annual_operating_costs(p: Property) -> float:
    return (
        p.management_phase2
        + p.provision_costs_phase2
        + p.provision_voids_phase2
        + p.bills_phase2
    )


def _roi(cashflow: float, net_cash: float) -> float:
    return (cashflow / net_cash) * 100.0 if net_cash > 0 else 0.0


def _pct_of(numerator: float, denominator: float) -> float:
    return (numerator / denominator) * 100.0 if denominator else 0.0


def compute_property_metrics(p: Property) -> PropertyMetrics:
    total_cash = total_cash_invested(p)
    net_cash = total_cash - p.equity_release
    mortgage = p.revaluation_estimate * (1 - p.deposit_pct_phase2)
    interest = mortgage * p.mortgage_rate_phase2
    op_costs = annual_operating_costs(p)
    cashflow = p.annual_rent_phase2 - op_costs - interest

    return PropertyMetrics(
        total_cash_invested=total_cash,
        net_cash_invested=net_cash,
        outstanding_mortgage=mortgage,
        annual_mortgage_interest=interest,
        annual_operating_costs=op_costs,
        annual_cashflow=cashflow,
        monthly_cashflow=cashflow / 12.0,
        roi_pct=_roi(cashflow, net_cash),
        equity=p.market_value_est - mortgage,
        gross_yield_pct=_pct_of(p.annual_rent_phase2, p.market_value_est),
        net_yield_pct=_pct_of(p.annual_rent_phase2 - op_costs, p.market_value_est),
        ltv_pct=(1 - p.deposit_pct_phase2) * 100.0,
    )


def roi_tone(roi_pct: float) -> str:
    """'good' (>= 10%), 'warning' (>= 0%) or 'bad'."""
    if roi_pct >= ROI_GOOD_PCT:
        return "good"
    if roi_pct >= 0:
        return "warning"
    return "bad"


def cashflow_tone(cashflow: float) -> str:
    return "good" if cashflow >= 0 else "bad"


# --------------------------------------------------------------------------- #
# Scenarios
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ScenarioResult:
    scenario_id: str
    label: str
    revaluation_estimate: float
    equity_release: float
    mortgage_rate_phase2: float
    annual_rent_phase2: float
    outstanding_mortgage: float
    annual_mortgage_interest: float
    net_cash_invested: float
    annual_cashflow: float
    monthly_cashflow: float
    roi_pct: float


def evaluate_scenario(p: Property, s: Scenario) -> ScenarioResult:
    """Re-run the phase-2 formulas with the scenario's assumptions.

    Running costs and cash deployed come from the base property.
    """
    mortgage = s.revaluation_estimate * (1 - s.deposit_pct_phase2)
    interest = mortgage * s.mortgage_rate_phase2
    net_cash = total_cash_invested(p) - s.equity_release
    cashflow = s.annual_rent_phase2 - annual_operating_costs(p) - interest

    return ScenarioResult(
        scenario_id=s.scenario_id,
        label=s.scenario_label,
        revaluation_estimate=s.revaluation_estimate,
        equity_release=s.equity_release,
        mortgage_rate_phase2=s.mortgage_rate_phase2,
        annual_rent_phase2=s.annual_rent_phase2,
        outstanding_mortgage=mortgage,
        annual_mortgage_interest=interest,
        net_cash_invested=net_cash,
        annual_cashflow=cashflow,
        monthly_cashflow=cashflow / 12.0,
        roi_pct=_roi(cashflow, net_cash),
    )


def evaluate_scenarios(p: Property, scenarios: Sequence[Scenario]) -> List[ScenarioResult]:
    return [evaluate_scenario(p, s) for s in scenarios if s.property_id == p.property_id]


# --------------------------------------------------------------------------- #
# Appreciation timeline
# --------------------------------------------------------------------------- #

def build_value_points(
    p: Property,
    capital_transactions: Sequence[CapitalTransaction],
    valuations: Sequence[Valuation],
    as_of: date = PORTFOLIO_AS_OF,
) -> List[ValuePoint]:
    """
    Known value milestones for one property, ascending by date.

    Recorded valuations for the address take priority; the market value
    estimate is appended at ``as_of`` when it is newer than the last one.
    Without valuations the timeline is synthesised from the purchase and
    refinance capital transactions plus the market value estimate.
    """
    own_vals = sorted(
        (v for v in valuations if v.address == p.address),
        key=lambda v: v.date,
    )

    if own_vals:
        points = [ValuePoint(date=v.date, value=v.value, label=v.source) for v in own_vals]
        if as_of > own_vals[-1].date:
            points.append(ValuePoint(date=as_of, value=p.market_value_est, label=MARKET_ESTIMATE_LABEL))
        return points

    own_txns = [t for t in capital_transactions if t.property_id == p.property_id]
    purchase = next((t for t in own_txns if t.type == "purchase"), None)
    refinance = next((t for t in own_txns if t.type == "refinance"), None)

    points: List[ValuePoint] = []
    if purchase is not None:
        points.append(ValuePoint(date=purchase.date, value=p.purchase_price, label=PURCHASE_LABEL))
    if refinance is not None:
        points.append(ValuePoint(date=refinance.date, value=p.revaluation_estimate, label=REVALUATION_LABEL))
    points.append(ValuePoint(date=as_of, value=p.market_value_est, label=MARKET_ESTIMATE_LABEL))
    return points


@dataclass(frozen=True)
class Appreciation:
    absolute: float
    pct: float


def total_appreciation(points: Sequence[ValuePoint]) -> Optional[Appreciation]:
    """First-to-last change; None for fewer than two points."""
    if len(points) < 2:
        return None
    first, last = points[0].value, points[-1].value
    change = last - first
    return Appreciation(absolute=change, pct=(change / first) * 100.0 if first else 0.0)


def breakeven_target(points: Sequence[ValuePoint], metrics: PropertyMetrics) -> Optional[float]:
    """Purchase baseline (first milestone) plus net cash invested."""
    if not points:
        return None
    return points[0].value + metrics.net_cash_invested


# --------------------------------------------------------------------------- #
# Full panel analysis
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class PropertyAnalysis:
    property: Property
    metrics: PropertyMetrics
    capital_transactions: List[CapitalTransaction]
    scenarios: List[ScenarioResult]
    value_points: List[ValuePoint]
    appreciation: Optional[Appreciation]
    target: Optional[float]
    breakeven: Optional[BreakevenResult]


def analyze_property(
    p: Property,
    capital_transactions: Sequence[CapitalTransaction],
    scenarios: Sequence[Scenario],
    valuations: Sequence[Valuation],
    as_of: date = PORTFOLIO_AS_OF,
) -> PropertyAnalysis:
    """Everything the Property Analysis panel renders, in one pass."""
    metrics = compute_property_metrics(p)
    points = build_value_points(p, capital_transactions, valuations, as_of=as_of)
    target = breakeven_target(points, metrics)

    return PropertyAnalysis(
        property=p,
        metrics=metrics,
        capital_transactions=[t for t in capital_transactions if t.property_id == p.property_id],
        scenarios=evaluate_scenarios(p, scenarios),
        value_points=points,
        appreciation=total_appreciation(points),
        target=target,
        breakeven=estimate_breakeven(points, target) if target is not None else None,
    )

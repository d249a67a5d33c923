# tests/test_property_metrics.py
from datetime import date

import pytest

from analytics.breakeven import BreakevenStatus, ValuePoint
from analytics.property_metrics import (
    MARKET_ESTIMATE_LABEL,
    PURCHASE_LABEL,
    REVALUATION_LABEL,
    analyze_property,
    build_value_points,
    cashflow_tone,
    compute_property_metrics,
    evaluate_scenarios,
    roi_tone,
    total_appreciation,
)
from core.records import CapitalTransaction, Scenario, Valuation, parse_rows

AS_OF = date(2026, 2, 26)


def test_metrics_for_known_property(prop):
    m = compute_property_metrics(prop)

    assert m.total_cash_invested == pytest.approx(81_000)
    assert m.net_cash_invested == pytest.approx(51_000)
    assert m.outstanding_mortgage == pytest.approx(195_000)
    assert m.annual_mortgage_interest == pytest.approx(9_750)
    assert m.annual_operating_costs == pytest.approx(4_200)
    assert m.annual_cashflow == pytest.approx(10_050)
    assert m.monthly_cashflow == pytest.approx(837.5)
    assert m.roi_pct == pytest.approx(10_050 / 51_000 * 100)
    assert m.equity == pytest.approx(75_000)
    assert m.gross_yield_pct == pytest.approx(24_000 / 270_000 * 100)
    assert m.net_yield_pct == pytest.approx(19_800 / 270_000 * 100)
    assert m.ltv_pct == pytest.approx(75)


def test_zero_net_cash_and_market_value_do_not_divide(prop):
    m = compute_property_metrics(prop.model_copy(update={"equity_release": 81_000, "market_value_est": 0}))
    assert m.roi_pct == 0.0
    assert m.gross_yield_pct == 0.0
    assert m.net_yield_pct == 0.0


@pytest.mark.parametrize(
    "roi, tone",
    [(25.0, "good"), (10.0, "good"), (9.99, "warning"), (0.0, "warning"), (-0.1, "bad")],
)
def test_roi_tone(roi, tone):
    assert roi_tone(roi) == tone


def test_cashflow_tone():
    assert cashflow_tone(0) == "good"
    assert cashflow_tone(-1) == "bad"


def test_scenarios_use_base_running_costs(prop, raw_scenarios):
    results = evaluate_scenarios(prop, parse_rows(Scenario, raw_scenarios))

    assert [s.scenario_id for s in results] == ["S1"]
    s = results[0]
    assert s.outstanding_mortgage == pytest.approx(180_000)
    assert s.annual_mortgage_interest == pytest.approx(10_800)
    assert s.net_cash_invested == pytest.approx(66_000)
    assert s.annual_cashflow == pytest.approx(22_000 - 4_200 - 10_800)
    assert s.roi_pct == pytest.approx(7_000 / 66_000 * 100)


# --------------------------------------------------------------------------- #
# Value timeline
# --------------------------------------------------------------------------- #

def test_valuations_take_priority_and_market_estimate_is_appended(prop, raw_valuations, raw_capital_transactions):
    points = build_value_points(
        prop,
        parse_rows(CapitalTransaction, raw_capital_transactions),
        parse_rows(Valuation, raw_valuations),
        as_of=AS_OF,
    )
    assert [(p.date, p.value) for p in points] == [
        (date(2023, 6, 1), 200_000),
        (date(2024, 6, 1), 260_000),
        (AS_OF, 270_000),
    ]
    assert points[1].label == "RICS survey"
    assert points[-1].label == MARKET_ESTIMATE_LABEL


def test_market_estimate_not_appended_when_valuation_is_newer(prop, raw_valuations):
    valuations = parse_rows(Valuation, raw_valuations)
    points = build_value_points(prop, [], valuations, as_of=date(2024, 6, 1))
    assert len(points) == 2


def test_valuations_for_other_addresses_are_ignored(prop):
    other = Valuation(date=date(2024, 1, 1), value=1, address="66 Headingley Mount")
    points = build_value_points(prop, [], [other], as_of=AS_OF)
    assert [p.label for p in points] == [MARKET_ESTIMATE_LABEL]


def test_falls_back_to_capital_transactions(prop, raw_capital_transactions):
    points = build_value_points(
        prop, parse_rows(CapitalTransaction, raw_capital_transactions), [], as_of=AS_OF
    )
    assert [p.label for p in points] == [PURCHASE_LABEL, REVALUATION_LABEL, MARKET_ESTIMATE_LABEL]
    assert [p.value for p in points] == [200_000, 260_000, 270_000]
    assert points[0].date == date(2023, 5, 15)


def test_total_appreciation():
    assert total_appreciation([]) is None

    points = [ValuePoint(date(2023, 1, 1), 200_000), ValuePoint(date(2025, 1, 1), 270_000)]
    appreciation = total_appreciation(points)
    assert appreciation.absolute == pytest.approx(70_000)
    assert appreciation.pct == pytest.approx(35.0)


def test_analysis_interpolates_capital_recovery(snapshot):
    prop = snapshot.property_by_id("P001")
    a = analyze_property(
        prop,
        snapshot.capital_transactions,
        snapshot.scenarios,
        snapshot.valuations,
        as_of=AS_OF,
    )

    assert a.target == pytest.approx(251_000)
    assert a.breakeven.status is BreakevenStatus.INTERPOLATED
    assert a.breakeven.fraction == pytest.approx(51 / 60)
    assert len(a.capital_transactions) == 2
    assert [s.label for s in a.scenarios] == ["Conservative"]

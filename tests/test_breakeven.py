# tests/test_breakeven.py
from datetime import date, datetime

import pytest

from analytics.breakeven import (
    EXTENSION_LABEL,
    BreakevenStatus,
    ValuePoint,
    estimate_breakeven,
)

T0 = date(2022, 1, 1)
T1 = date(2024, 1, 1)


def test_interpolates_inside_bracketing_pair():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 150_000)]
    result = estimate_breakeven(points, 140_000)

    assert result.status is BreakevenStatus.INTERPOLATED
    assert result.fraction == pytest.approx(0.8)
    assert result.index == pytest.approx(0.8)
    assert result.achieved and not result.is_projected

    expected = datetime(2022, 1, 1) + (datetime(2024, 1, 1) - datetime(2022, 1, 1)) * 0.8
    assert abs((result.date - expected).total_seconds()) < 1


def test_single_point_below_target_is_undetermined():
    result = estimate_breakeven([ValuePoint(T0, 100_000)], 120_000)
    assert result.status is BreakevenStatus.UNDETERMINED
    assert result.date is None
    assert not result.is_determined


def test_falling_trend_is_undetermined():
    points = [ValuePoint(T0, 150_000), ValuePoint(T1, 140_000)]
    assert estimate_breakeven(points, 200_000).status is BreakevenStatus.UNDETERMINED


def test_flat_trend_is_undetermined():
    points = [ValuePoint(T0, 150_000), ValuePoint(T1, 150_000)]
    assert estimate_breakeven(points, 200_000).status is BreakevenStatus.UNDETERMINED


def test_first_point_meeting_target_is_already_achieved():
    points = [ValuePoint(T0, 300_000), ValuePoint(T1, 320_000)]
    result = estimate_breakeven(points, 300_000)

    assert result.status is BreakevenStatus.ALREADY_ACHIEVED
    assert result.index == 0
    assert result.date == datetime(2022, 1, 1)


def test_empty_points_are_undetermined():
    assert estimate_breakeven([], 1.0).status is BreakevenStatus.UNDETERMINED


def test_equal_values_in_pair_are_skipped():
    # (100k, 100k) can never straddle; the next pair does.
    points = [
        ValuePoint(date(2020, 1, 1), 100_000),
        ValuePoint(date(2021, 1, 1), 100_000),
        ValuePoint(date(2022, 1, 1), 200_000),
    ]
    result = estimate_breakeven(points, 150_000)
    assert result.status is BreakevenStatus.INTERPOLATED
    assert result.index == pytest.approx(1.5)


def test_first_bracketing_pair_wins():
    points = [
        ValuePoint(date(2020, 1, 1), 100_000),
        ValuePoint(date(2021, 1, 1), 200_000),
        ValuePoint(date(2022, 1, 1), 120_000),
        ValuePoint(date(2023, 1, 1), 220_000),
    ]
    result = estimate_breakeven(points, 150_000)
    assert result.index == pytest.approx(0.5)


def test_projects_rising_trend_with_extension_point():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 120_000)]
    result = estimate_breakeven(points, 130_000)

    assert result.status is BreakevenStatus.PROJECTED
    assert result.is_projected and not result.achieved
    assert result.index == 2.0
    # 10k per year; one more year past the last point
    assert result.rate_per_year == pytest.approx(10_000, rel=1e-2)
    assert result.date.year == 2024 and result.date > datetime(2024, 12, 1)

    breakeven_point, beyond = result.projected_points
    assert breakeven_point.value == 130_000
    assert beyond.label == EXTENSION_LABEL
    assert beyond.date.year == result.date.year + 2
    assert beyond.value > 130_000


def test_projection_beyond_horizon_is_undetermined():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 100_100)]
    assert estimate_breakeven(points, 200_000).status is BreakevenStatus.UNDETERMINED


def test_horizon_is_configurable():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 120_000)]
    # target is 4 years past the last point
    assert estimate_breakeven(points, 160_000, max_years=3).status is BreakevenStatus.UNDETERMINED
    assert estimate_breakeven(points, 160_000, max_years=5).status is BreakevenStatus.PROJECTED


def test_feeding_back_extension_point_reproduces_breakeven_date():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 120_000)]
    first = estimate_breakeven(points, 135_000)
    beyond = first.projected_points[-1]

    second = estimate_breakeven([*points, ValuePoint(beyond.date, beyond.value)], 135_000)

    assert second.is_determined
    assert abs((second.date - first.date).total_seconds()) < 1


def test_is_deterministic():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 120_000)]
    assert estimate_breakeven(points, 130_000) == estimate_breakeven(points, 130_000)


def test_as_dict_is_json_ready():
    points = [ValuePoint(T0, 100_000), ValuePoint(T1, 120_000)]
    payload = estimate_breakeven(points, 130_000).as_dict()
    assert payload["status"] == "projected"
    assert payload["projected"] is True
    assert isinstance(payload["date"], str)
    assert len(payload["projected_points"]) == 2

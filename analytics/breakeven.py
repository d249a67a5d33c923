"""
analytics/breakeven.py
----------------------

Capital-recovery (breakeven) estimator for the asset-appreciation timeline.

Given the known value milestones of a property and a target amount
(purchase baseline + net cash invested), find the date at which the value
reaches the target:

1. already achieved  -> the first milestone already meets the target;
2. interpolated      -> linear interpolation inside the first bracketing pair;
3. projected         -> linear extrapolation of the first->last trend, with
                        one extra "beyond" point for chart continuity;
4. undetermined      -> none of the above.

Pure and deterministic: no I/O, no Streamlit imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Sequence, Tuple

import pandas as pd

from core.formatting import to_datetime
from core.ui_config import BREAKEVEN_EXTENSION_YEARS, BREAKEVEN_MAX_YEARS

SECONDS_PER_YEAR = 365.25 * 24 * 3600
EPOCH = datetime(1970, 1, 1)

BREAKEVEN_LABEL = "Capital Recovered"
PROJECTED_LABEL = "Capital Recovered (projected)"
EXTENSION_LABEL = "Trend extension"


@dataclass(frozen=True)
class ValuePoint:
    """A (date, value, label) milestone on the appreciation timeline."""

    date: date
    value: float
    label: str = ""
    projected: bool = False


class BreakevenStatus(str, Enum):
    ALREADY_ACHIEVED = "already_achieved"
    INTERPOLATED = "interpolated"
    PROJECTED = "projected"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class BreakevenResult:
    status: BreakevenStatus
    target: float
    date: Optional[datetime] = None
    index: Optional[float] = None
    fraction: Optional[float] = None
    rate_per_year: Optional[float] = None
    projected_points: Tuple[ValuePoint, ...] = ()

    @property
    def is_determined(self) -> bool:
        return self.status is not BreakevenStatus.UNDETERMINED

    @property
    def achieved(self) -> bool:
        return self.status in (BreakevenStatus.ALREADY_ACHIEVED, BreakevenStatus.INTERPOLATED)

    @property
    def is_projected(self) -> bool:
        return self.status is BreakevenStatus.PROJECTED

    def as_dict(self) -> dict:
        """JSON-safe representation (used by the backend)."""
        return {
            "status": self.status.value,
            "target": self.target,
            "date": self.date.isoformat() if self.date else None,
            "index": self.index,
            "fraction": self.fraction,
            "rate_per_year": self.rate_per_year,
            "achieved": self.achieved,
            "projected": self.is_projected,
            "projected_points": [
                {"date": to_datetime(p.date).isoformat(), "value": p.value, "label": p.label}
                for p in self.projected_points
            ],
        }


def _seconds(d: date) -> float:
    return (to_datetime(d) - EPOCH).total_seconds()


def _add_years(moment: datetime, years: int) -> datetime:
    """Calendar-aware year shift (29 Feb rolls back to 28 Feb)."""
    return (pd.Timestamp(moment) + pd.DateOffset(years=years)).to_pydatetime()


def estimate_breakeven(
    points: Sequence[ValuePoint],
    target: float,
    *,
    max_years: float = BREAKEVEN_MAX_YEARS,
    extension_years: int = BREAKEVEN_EXTENSION_YEARS,
) -> BreakevenResult:
    """
    Estimate when the timeline value first reaches ``target``.

    Parameters
    ----------
    points : sequence of ValuePoint
        Known milestones, ascending by date.
    target : float
        Purchase baseline + net cash invested.
    max_years : float
        Projections this far (or further) past the last milestone are rejected.
    extension_years : int
        Calendar years between the projected breakeven and the "beyond" point.

    Returns
    -------
    BreakevenResult
    """
    if not points:
        return BreakevenResult(status=BreakevenStatus.UNDETERMINED, target=target)

    first = points[0]
    if first.value >= target:
        return BreakevenResult(
            status=BreakevenStatus.ALREADY_ACHIEVED,
            target=target,
            date=to_datetime(first.date),
            index=0.0,
            fraction=0.0,
        )

    # First bracketing pair wins
    for i in range(len(points) - 1):
        p0, p1 = points[i], points[i + 1]
        if not (p0.value < target <= p1.value):
            continue
        span = p1.value - p0.value
        if span == 0:
            continue
        fraction = (target - p0.value) / span
        d0, d1 = to_datetime(p0.date), to_datetime(p1.date)
        return BreakevenResult(
            status=BreakevenStatus.INTERPOLATED,
            target=target,
            date=d0 + (d1 - d0) * fraction,
            index=i + fraction,
            fraction=fraction,
        )

    if len(points) < 2:
        return BreakevenResult(status=BreakevenStatus.UNDETERMINED, target=target)

    last = points[-1]
    elapsed = _seconds(last.date) - _seconds(first.date)
    gain = last.value - first.value
    if elapsed <= 0 or gain <= 0:
        return BreakevenResult(status=BreakevenStatus.UNDETERMINED, target=target)

    rate = gain / elapsed  # value per second
    seconds_to_target = (target - last.value) / rate
    if not (0 < seconds_to_target < max_years * SECONDS_PER_YEAR):
        return BreakevenResult(status=BreakevenStatus.UNDETERMINED, target=target)

    breakeven_at = to_datetime(last.date) + timedelta(seconds=seconds_to_target)
    beyond_at = _add_years(breakeven_at, extension_years)
    beyond_value = target + rate * (beyond_at - breakeven_at).total_seconds()

    projected = (
        ValuePoint(date=breakeven_at, value=target, label=PROJECTED_LABEL, projected=True),
        ValuePoint(date=beyond_at, value=beyond_value, label=EXTENSION_LABEL, projected=True),
    )
    return BreakevenResult(
        status=BreakevenStatus.PROJECTED,
        target=target,
        date=breakeven_at,
        index=float(len(points)),
        rate_per_year=rate * SECONDS_PER_YEAR,
        projected_points=projected,
    )

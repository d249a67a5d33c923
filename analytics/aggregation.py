"""
analytics/aggregation.py
------------------------

Pure P&L helpers over ledger transactions.

This module must remain network-agnostic and pure:
- Input: sequences of ``core.records.Transaction`` plus explicit state
  objects (``LedgerFilters``, ``SortConfig``).
- Output: numbers, lists and small dataclasses ready for rendering.

Used by ui/overview.py and backend.main.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

from core.formatting import fmt_number_key
from core.records import Transaction
from core.ui_config import INCOME_CATEGORY

# --------------------------------------------------------------------------- #
# Ledger columns
# --------------------------------------------------------------------------- #

AMOUNT = "amount"

# column key -> header shown in the ledger
LEDGER_COLUMNS: Dict[str, str] = {
    "date": "Date",
    "property_address": "Property",
    "description": "Description",
    "item_type": "Type",
    AMOUNT: "Amount (£)",
}

_DISPLAY_VALUE: Dict[str, Callable[[Transaction], str]] = {
    "date": lambda t: t.date.isoformat() if t.date else "",
    "property_address": lambda t: t.property_address,
    "description": lambda t: t.description,
    "item_type": lambda t: t.item_type,
    AMOUNT: lambda t: fmt_number_key(t.amount),
}


def display_value(txn: Transaction, column: str) -> str:
    """Text value of ``column`` used by the multi-select filters."""
    try:
        return _DISPLAY_VALUE[column](txn)
    except KeyError:
        raise ValueError(f"Unknown ledger column: {column!r}") from None


# --------------------------------------------------------------------------- #
# Totals
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class PnLSummary:
    income: float
    expenses: float
    net: float
    net_margin_pct: float
    count: int


def is_income(txn: Transaction, income_category: str = INCOME_CATEGORY) -> bool:
    return txn.item_type == income_category


def income_total(rows: Iterable[Transaction], income_category: str = INCOME_CATEGORY) -> float:
    return sum((t.amount for t in rows if is_income(t, income_category)), 0.0)


def expense_total(rows: Iterable[Transaction], income_category: str = INCOME_CATEGORY) -> float:
    """Sum of all non-income rows (negative for costs)."""
    return sum((t.amount for t in rows if not is_income(t, income_category)), 0.0)


def summarize(rows: Sequence[Transaction], income_category: str = INCOME_CATEGORY) -> PnLSummary:
    """
    Rental income, expenses and net for the (already filtered) rows.

    Expenses are stored as negative amounts, so ``net = income + expenses``.
    Net margin is ``net / income`` in percent, 0 when there is no income.
    """
    income = income_total(rows, income_category)
    expenses = expense_total(rows, income_category)
    net = income + expenses
    margin = (net / income) * 100.0 if income > 0 else 0.0
    return PnLSummary(
        income=income,
        expenses=expenses,
        net=net,
        net_margin_pct=margin,
        count=len(rows),
    )


def filtered_total(rows: Iterable[Transaction]) -> float:
    return sum((t.amount for t in rows), 0.0)


# --------------------------------------------------------------------------- #
# Breakdown by type
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class BreakdownRow:
    item_type: str
    total: float
    is_income: bool


def breakdown_by_type(
    rows: Iterable[Transaction],
    income_category: str = INCOME_CATEGORY,
) -> List[BreakdownRow]:
    """Group by ``item_type``, sum amounts, largest total first."""
    totals: Dict[str, float] = {}
    for t in rows:
        totals[t.item_type] = totals.get(t.item_type, 0.0) + t.amount

    breakdown = [
        BreakdownRow(item_type=k, total=v, is_income=(k == income_category))
        for k, v in totals.items()
    ]
    breakdown.sort(key=lambda r: r.total, reverse=True)
    return breakdown


def expense_breakdown(
    breakdown: Iterable[BreakdownRow],
) -> List[BreakdownRow]:
    """Non-income rows with absolute totals, for the expense pie chart."""
    return [
        BreakdownRow(item_type=r.item_type, total=abs(r.total), is_income=False)
        for r in breakdown
        if not r.is_income
    ]


# --------------------------------------------------------------------------- #
# Filtering
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class LedgerFilters:
    """
    Active ledger filters. Every set filter must hold (logical AND).

    ``property_key`` is the lower-cased first address line of the selected
    property; ``columns`` maps a ledger column to its selected display values
    (an empty selection means "no filter" for that column).
    """

    property_key: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None
    columns: Mapping[str, FrozenSet[str]] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return bool(
            self.property_key
            or self.start
            or self.end
            or any(self.columns.values())
        )


def matches(txn: Transaction, filters: LedgerFilters) -> bool:
    if filters.property_key and filters.property_key not in txn.property_address.lower():
        return False
    if (filters.start or filters.end) and txn.date is None:
        return False
    if filters.start and txn.date < filters.start:
        return False
    if filters.end and txn.date > filters.end:
        return False
    for column, selected in filters.columns.items():
        if selected and display_value(txn, column) not in selected:
            return False
    return True


def filter_transactions(
    rows: Iterable[Transaction],
    filters: Optional[LedgerFilters],
) -> List[Transaction]:
    """Rows passing every active filter, input order preserved."""
    if filters is None:
        return list(rows)
    for column in filters.columns:
        if column not in _DISPLAY_VALUE:
            raise ValueError(f"Unknown ledger column: {column!r}")
    return [t for t in rows if matches(t, filters)]


def unique_values(rows: Iterable[Transaction], column: str) -> List[str]:
    """Sorted distinct display values (dropdown filter options)."""
    return sorted({display_value(t, column) for t in rows})


# --------------------------------------------------------------------------- #
# Sorting
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class SortConfig:
    key: str
    direction: str = "asc"  # "asc" | "desc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


def toggle_sort(current: Optional[SortConfig], key: str) -> SortConfig:
    """Clicking the active column flips direction; a new column starts ascending."""
    if current is not None and current.key == key:
        return SortConfig(key=key, direction="asc" if current.descending else "desc")
    return SortConfig(key=key, direction="asc")


def _sort_key(column: str) -> Callable[[Transaction], object]:
    if column == AMOUNT:
        return lambda t: t.amount
    if column == "date":
        return lambda t: t.date
    if column in _DISPLAY_VALUE:
        return lambda t: display_value(t, column).lower()
    raise ValueError(f"Unknown ledger column: {column!r}")


def sort_transactions(
    rows: Iterable[Transaction],
    sort: Optional[SortConfig],
) -> List[Transaction]:
    """
    Stable sort: numeric on the amount column, case-insensitive text otherwise.
    Undated rows go last on the date column in either direction.

    ``sort=None`` keeps the fetch order.
    """
    rows = list(rows)
    if sort is None:
        return rows
    if sort.key == "date":
        undated = [t for t in rows if t.date is None]
        rows = [t for t in rows if t.date is not None]
        return sorted(rows, key=_sort_key(sort.key), reverse=sort.descending) + undated
    return sorted(rows, key=_sort_key(sort.key), reverse=sort.descending)

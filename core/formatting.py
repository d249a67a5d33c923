"""
core/formatting.py
------------------
Display formatting for currency, percentages and dates (en-GB conventions).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CURRENCY = "£"


def fmt_number(n: float) -> str:
    """Thousands-separated, no decimals, halves away from zero: 2.5 -> '3'."""
    whole = Decimal(str(float(n or 0.0))).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    if not whole:
        whole = Decimal(0)  # no '-0'
    return f"{whole:,.0f}"


def fmt_currency(n: float) -> str:
    """'£1,235' / '£-1,235' (sign kept where the source keeps it)."""
    return f"{CURRENCY}{fmt_number(n)}"


def fmt_signed_currency(n: float) -> str:
    """'+£1,200' for positives, '-£45' for negatives."""
    sign = "-" if n < 0 else "+"
    return f"{sign}{CURRENCY}{fmt_number(abs(n))}"


def fmt_expense(n: float) -> str:
    """Expenses are stored negative but shown as '-£1,200'."""
    return f"-{CURRENCY}{fmt_number(abs(n))}"


def fmt_pct(n: float, digits: int = 1) -> str:
    return f"{float(n or 0.0):.{digits}f}%"


def fmt_rate(fraction: float, digits: int = 1) -> str:
    """Fraction to percentage: 0.055 -> '5.5%'."""
    return fmt_pct(float(fraction or 0.0) * 100.0, digits)


def fmt_date(d: Optional[date]) -> str:
    """Ledger date: 2025-03-07 -> '07 Mar 25'."""
    if d is None:
        return "—"
    return d.strftime("%d %b %y")


def fmt_month_year(d: Optional[date]) -> str:
    """Timeline label: 2025-03-07 -> 'Mar 2025'."""
    if d is None:
        return "—"
    return d.strftime("%b %Y")


def fmt_as_of(d: date) -> str:
    """Header stamp: 'AS OF 27 FEB 2026'."""
    return f"AS OF {d.strftime('%d %b %Y').upper()}"


def fmt_number_key(value: float) -> str:
    """
    Stable text form of an amount for filter options.

    Integral values drop the decimal part (``1200.0 -> '1200'``) so the
    option list reads like the stored figures.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_datetime(d: date) -> datetime:
    """Promote a calendar date to midnight; datetimes pass through."""
    if isinstance(d, datetime):
        return d
    return datetime(d.year, d.month, d.day)

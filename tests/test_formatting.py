# tests/test_formatting.py
from datetime import date, datetime

from core.formatting import (
    fmt_as_of,
    fmt_currency,
    fmt_date,
    fmt_number,
    fmt_expense,
    fmt_month_year,
    fmt_number_key,
    fmt_pct,
    fmt_rate,
    fmt_signed_currency,
    to_datetime,
)


def test_currency():
    assert fmt_currency(1234.6) == "£1,235"
    assert fmt_currency(0) == "£0"
    assert fmt_signed_currency(1200) == "+£1,200"
    assert fmt_signed_currency(-45) == "-£45"
    assert fmt_expense(-1200) == "-£1,200"


def test_percentages():
    assert fmt_pct(19.7058) == "19.7%"
    assert fmt_pct(75, 0) == "75%"
    assert fmt_rate(0.055) == "5.5%"


def test_dates():
    assert fmt_date(date(2025, 3, 7)) == "07 Mar 25"
    assert fmt_month_year(date(2025, 3, 7)) == "Mar 2025"
    assert fmt_as_of(date(2026, 2, 27)) == "AS OF 27 FEB 2026"
    assert fmt_date(None) == "—"


def test_number_key():
    assert fmt_number_key(1200.0) == "1200"
    assert fmt_number_key(-350.5) == "-350.5"


def test_to_datetime():
    assert to_datetime(date(2025, 1, 2)) == datetime(2025, 1, 2)
    moment = datetime(2025, 1, 2, 3, 4)
    assert to_datetime(moment) is moment


def test_number_rounds_halves_away_from_zero():
    assert fmt_number(2.5) == "3"
    assert fmt_number(0.5) == "1"
    assert fmt_number(-2.5) == "-3"
    assert fmt_number(-0.4) == "0"
    assert fmt_number(1234.5) == "1,235"

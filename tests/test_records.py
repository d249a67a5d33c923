# tests/test_records.py
from datetime import date, datetime

import pytest

from core.records import (
    CapitalTransaction,
    Property,
    Transaction,
    coerce_amount,
    coerce_date,
    parse_rows,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (True, 0.0),
        ("1,250.50", 1250.5),
        (" -45 ", -45.0),
        (12, 12.0),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


def test_coerce_date():
    assert coerce_date("2025-03-07") == date(2025, 3, 7)
    assert coerce_date("2025-03-07T10:30:00+00:00") == date(2025, 3, 7)
    assert coerce_date(datetime(2025, 3, 7, 12)) == date(2025, 3, 7)
    assert coerce_date(None) is None
    assert coerce_date("") is None
    assert coerce_date("07/03/2025") is None


def test_transaction_accepts_store_columns():
    t = Transaction.model_validate(
        {
            "id": 17,
            "Item date": "2025-01-05",
            "Property address": "70 Estcourt Avenue",
            "Item description": None,
            "Item type": "Rent Paid",
            "Item amount inc VAT": None,
            "unexpected": "ignored",
        }
    )
    assert t.id == "17"
    assert t.date == date(2025, 1, 5)
    assert t.description == ""
    assert t.amount == 0.0


def test_transaction_accepts_field_names():
    t = Transaction(date=date(2025, 1, 5), item_type="Repairs", amount=-10)
    assert t.amount == -10.0


def test_records_are_frozen():
    t = Transaction(date=date(2025, 1, 5))
    with pytest.raises(Exception):
        t.amount = 5


def test_property_missing_numerics_become_zero():
    p = Property.model_validate({"property_id": 7, "address": "8 Talbot Mount, Leeds", "purchase_price": None})
    assert p.property_id == "7"
    assert p.purchase_price == 0.0
    assert p.beds_phase2 == 0
    assert p.label == "8 Talbot Mount, Leeds"
    assert p.address_key == "8 talbot mount"


def test_property_label_includes_city(prop):
    assert prop.label == "70 Estcourt Avenue, Leeds"


def test_parse_rows_drops_invalid_rows():
    rows = [
        {"transaction_id": "C1", "property_id": "P1", "date": "2024-01-01", "amount": "100"},
        {"transaction_id": "C2", "property_id": "P1", "date": "not a date"},
        {"transaction_id": "C3", "property_id": "P1"},
    ]
    parsed = parse_rows(CapitalTransaction, rows)
    assert [t.transaction_id for t in parsed] == ["C1"]
    assert parsed[0].amount == 100.0


def test_parse_rows_handles_none():
    assert parse_rows(Transaction, None) == []


def test_transaction_without_date_is_kept():
    rows = [
        {"Item date": None, "Item type": "Repairs", "Item amount inc VAT": -500},
        {"Item date": "garbage", "Item type": "Repairs", "Item amount inc VAT": -20},
        {"Item type": "Rent Paid", "Item amount inc VAT": 900},
    ]
    parsed = parse_rows(Transaction, rows)
    assert [t.amount for t in parsed] == [-500, -20, 900]
    assert all(t.date is None for t in parsed)

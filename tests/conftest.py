# tests/conftest.py
"""
Shared fixtures: a small two-property portfolio in store row format.
"""
import os
import sys

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from analytics.snapshot import build_snapshot
from core.records import Property, Transaction, parse_rows


@pytest.fixture
def raw_transactions():
    return [
        {"Item date": "2025-01-05", "Property address": "70 Estcourt Avenue, Leeds LS6",
         "Item description": "January rent", "Item type": "Rent Paid", "Item amount inc VAT": 2000},
        {"Item date": "2025-01-20", "Property address": "70 Estcourt Avenue, Leeds",
         "Item description": "Boiler repair", "Item type": "Repairs", "Item amount inc VAT": -350.5},
        {"Item date": "2025-02-05", "Property address": "66 Headingley Mount, Leeds",
         "Item description": "February rent", "Item type": "Rent Paid", "Item amount inc VAT": 1800},
        {"Item date": "2025-02-10", "Property address": "66 Headingley Mount",
         "Item description": "Agent fee", "Item type": "Management Fee", "Item amount inc VAT": -180},
        {"Item date": "2025-03-01", "Property address": "70 Estcourt Avenue",
         "Item description": "Insurance", "Item type": "Insurance", "Item amount inc VAT": -120},
    ]


@pytest.fixture
def transactions(raw_transactions):
    return parse_rows(Transaction, raw_transactions)


@pytest.fixture
def raw_properties():
    return [
        {
            "property_id": "P001",
            "address": "70 Estcourt Avenue",
            "city": "Leeds",
            "purchase_price": 200000,
            "deposit_pct_phase1": 0.25,
            "cash_deposit_phase1": 50000,
            "stamp_duty": 6000,
            "solicitor_fees": 2000,
            "agent_fee": 1000,
            "renovation_cost": 20000,
            "renovation_mgmt_fee": 2000,
            "mortgage_rate_phase1": 0.045,
            "revaluation_estimate": 260000,
            "market_value_est": 270000,
            "market_value_basis": "Comparable sales",
            "deposit_pct_phase2": 0.25,
            "equity_release": 30000,
            "mortgage_rate_phase2": 0.05,
            "annual_rent_phase2": 24000,
            "bills_phase2": None,
            "management_phase2": 2400,
            "provision_costs_phase2": 1200,
            "provision_voids_phase2": 600,
            "beds_phase2": 5,
            "notes_phase2": None,
            "property_link": "https://example.com/listing/70",
        },
        {
            "property_id": "P002",
            "address": "66 Headingley Mount",
            "city": "Leeds",
            "purchase_price": 180000,
            "cash_deposit_phase1": 45000,
            "revaluation_estimate": 210000,
            "market_value_est": 215000,
            "deposit_pct_phase2": 0.25,
            "mortgage_rate_phase2": 0.055,
            "annual_rent_phase2": 19000,
            "management_phase2": 1900,
        },
    ]


@pytest.fixture
def prop(raw_properties):
    return Property.model_validate(raw_properties[0])


@pytest.fixture
def raw_capital_transactions():
    return [
        {"transaction_id": "C1", "property_id": "P001", "date": "2023-05-15",
         "type": "purchase", "description": "Completion", "amount": -81000},
        {"transaction_id": "C2", "property_id": "P001", "date": "2024-03-01",
         "type": "refinance", "description": "Equity release", "amount": 30000},
    ]


@pytest.fixture
def raw_scenarios():
    return [
        {"scenario_id": "S1", "property_id": "P001", "scenario_label": "Conservative",
         "revaluation_estimate": 240000, "deposit_pct_phase2": 0.25, "equity_release": 15000,
         "mortgage_rate_phase2": 0.06, "annual_rent_phase2": 22000},
        {"scenario_id": "S2", "property_id": "P002", "scenario_label": "Base",
         "revaluation_estimate": 210000, "deposit_pct_phase2": 0.25, "equity_release": 0,
         "mortgage_rate_phase2": 0.055, "annual_rent_phase2": 19000},
    ]


@pytest.fixture
def raw_valuations():
    return [
        {"id": 1, "property_id": "P001", "date": "2023-06-01", "value": 200000,
         "source": "Purchase", "address": "70 Estcourt Avenue"},
        {"id": 2, "property_id": "P001", "date": "2024-06-01", "value": 260000,
         "source": "RICS survey", "address": "70 Estcourt Avenue"},
    ]


@pytest.fixture
def raw_tables(raw_transactions, raw_properties, raw_capital_transactions, raw_scenarios, raw_valuations):
    return {
        "transactions": raw_transactions,
        "properties": raw_properties,
        "capital_transactions": raw_capital_transactions,
        "scenarios": raw_scenarios,
        "valuations": raw_valuations,
    }


@pytest.fixture
def snapshot(raw_tables):
    return build_snapshot(raw_tables)

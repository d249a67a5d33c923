# tests/test_backend_api.py
"""
Backend endpoints over an in-memory snapshot (no store access).
"""
import pytest
from fastapi.testclient import TestClient

from analytics.aggregation import summarize
from backend.dependencies import get_snapshot
from backend.main import app


@pytest.fixture
def client(snapshot):
    app.dependency_overrides[get_snapshot] = lambda: snapshot
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "ok"
    assert body["version"] == app.version


def test_health(client, monkeypatch):
    monkeypatch.setattr(
        "core.health._check_data_source",
        lambda: {"connected": True, "url": "https://demo.supabase.co"},
    )
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["data_source_connected"] is True
    assert body["data_source_url"] == "https://demo.supabase.co"


def test_health_degraded(client, monkeypatch):
    monkeypatch.setattr("core.health._check_data_source", lambda: {"connected": False, "url": None})
    assert client.get("/health").json()["status"] == "degraded"


def test_summary_matches_pure_functions(client, snapshot):
    body = client.get("/portfolio/summary").json()
    pnl = summarize(snapshot.transactions)

    assert body["income"] == pytest.approx(pnl.income)
    assert body["expenses"] == pytest.approx(pnl.expenses)
    assert body["net"] == pytest.approx(pnl.net)
    assert body["count"] == 5
    assert sum(r["total"] for r in body["breakdown"]) == pytest.approx(pnl.net)


def test_summary_for_one_property_and_range(client):
    body = client.get(
        "/portfolio/summary",
        params={"property_id": "P001", "start": "2025-01-01", "end": "2025-01-31"},
    ).json()
    assert body["count"] == 2
    assert body["income"] == pytest.approx(2000)
    assert body["expenses"] == pytest.approx(-350.5)


def test_unknown_property_is_404(client):
    assert client.get("/portfolio/summary", params={"property_id": "P999"}).status_code == 404
    assert client.get("/ledger", params={"property_id": "P999"}).status_code == 404
    assert client.get("/properties/P999/analysis").status_code == 404


@pytest.mark.parametrize(
    "params",
    [
        {"start": "not-a-date"},
        {"sort": "colour"},
        {"sort": "amount", "direction": "sideways"},
    ],
)
def test_malformed_params_are_422(client, params):
    assert client.get("/ledger", params=params).status_code == 422


def test_ledger_sorted_with_total(client):
    body = client.get("/ledger", params={"sort": "amount", "direction": "desc"}).json()
    assert [r["amount"] for r in body["results"]] == [2000, 1800, -120, -180, -350.5]
    assert body["total"] == pytest.approx(3149.5)
    assert body["count"] == 5
    assert body["results"][0]["date"] == "2025-01-05"


def test_properties_list(client):
    body = client.get("/properties").json()
    assert [p["property_id"] for p in body] == ["P001", "P002"]
    assert body[0]["label"] == "70 Estcourt Avenue, Leeds"


def test_property_analysis(client):
    body = client.get("/properties/P001/analysis").json()

    assert body["metrics"]["net_cash_invested"] == pytest.approx(51_000)
    assert body["metrics"]["annual_cashflow"] == pytest.approx(10_050)
    assert [s["scenario_id"] for s in body["scenarios"]] == ["S1"]
    assert body["target"] == pytest.approx(251_000)
    assert body["breakeven"]["status"] == "interpolated"
    assert body["value_points"][0]["value"] == 200_000


def test_ledger_column_filters(client):
    body = client.get("/ledger", params=[("item_type", "Repairs"), ("item_type", "Insurance")]).json()
    assert body["count"] == 2
    assert body["total"] == pytest.approx(-470.5)

    body = client.get("/ledger", params={"item_type": "Rent Paid", "amount": "1800"}).json()
    assert [r["description"] for r in body["results"]] == ["February rent"]


def test_ledger_keeps_undated_rows(raw_tables):
    from analytics.snapshot import build_snapshot

    raw = dict(raw_tables)
    raw["transactions"] = raw["transactions"] + [
        {"Item date": None, "Property address": "70 Estcourt Avenue",
         "Item description": "Locksmith", "Item type": "Repairs", "Item amount inc VAT": -500},
    ]
    undated = build_snapshot(raw)
    app.dependency_overrides[get_snapshot] = lambda: undated
    try:
        client = TestClient(app)
        body = client.get("/ledger", params={"sort": "date", "direction": "desc"}).json()
        assert body["count"] == 6
        assert body["results"][-1]["date"] is None
        assert client.get("/portfolio/summary").json()["expenses"] == pytest.approx(-1150.5)
    finally:
        app.dependency_overrides.clear()

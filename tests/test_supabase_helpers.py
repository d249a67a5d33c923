# tests/test_supabase_helpers.py
from types import SimpleNamespace

import pytest

from supabase_client.config import get_supabase_client
from supabase_client.helpers import fetch_table, test_connection as probe_connection


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table

    def select(self, columns):
        self.client.log.append(("select", self.table, columns))
        return self

    def in_(self, column, values):
        self.client.log.append(("in", column, tuple(values)))
        return self

    def order(self, column):
        self.client.log.append(("order", column))
        return self

    def limit(self, n):
        self.client.log.append(("limit", n))
        return self

    def execute(self):
        if self.client.error:
            raise self.client.error
        return SimpleNamespace(data=self.client.rows)


class FakeClient:
    supabase_url = "https://demo.supabase.co"

    def __init__(self, rows=None, error=None):
        self.rows = rows
        self.error = error
        self.log = []

    def table(self, name):
        return FakeQuery(self, name)


def test_fetch_table_applies_filter_then_order():
    client = FakeClient(rows=[{"date": "2024-01-01"}])
    rows = fetch_table(
        "valuations",
        order="date",
        in_filter=("address", ["70 Estcourt Avenue"]),
        client=client,
    )

    assert rows == [{"date": "2024-01-01"}]
    assert client.log == [
        ("select", "valuations", "*"),
        ("in", "address", ("70 Estcourt Avenue",)),
        ("order", "date"),
    ]


def test_fetch_table_none_data_is_empty():
    assert fetch_table("transactions", client=FakeClient(rows=None)) == []


def test_fetch_table_failure_is_empty():
    assert fetch_table("transactions", client=FakeClient(error=ConnectionError("boom"))) == []


def test_connection_probe():
    assert probe_connection(FakeClient(rows=[])) == "https://demo.supabase.co"
    assert probe_connection(FakeClient(error=ConnectionError("boom"))) is None


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr("supabase_client.config.SUPABASE_URL", None)
    with pytest.raises(RuntimeError):
        get_supabase_client()

"""
analytics/snapshot.py
---------------------

Loads one immutable, validated snapshot of the portfolio tables.

Behavior
--------
1. Issue the five table queries in parallel (Supabase or the SQLite mirror).
2. Wait for all of them; a failed query contributes an empty collection.
3. Validate every row into ``core.records`` models.

The dashboard and the backend recompute everything from the returned
``PortfolioSnapshot``; nothing here is cached.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from core.records import (
    CapitalTransaction,
    Property,
    Scenario,
    Transaction,
    Valuation,
    parse_rows,
)
from core.ui_config import DATA_SOURCE, VALUATION_ADDRESSES

logger = logging.getLogger(__name__)

# (table, order column, in-filter column) per collection
TableQuery = Tuple[str, Optional[str], Optional[str]]

QUERIES: Dict[str, TableQuery] = {
    "transactions": ("transactions", None, None),
    "properties": ("properties_master", "property_id", None),
    "capital_transactions": ("capital_transactions", "property_id", None),
    "scenarios": ("scenarios", "property_id", None),
    "valuations": ("valuations", "date", "address"),
}

# fetch(table, order=..., in_filter=...) -> list of row dicts
Fetcher = Callable[..., List[Dict[str, Any]]]


@dataclass(frozen=True)
class PortfolioSnapshot:
    transactions: List[Transaction] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    capital_transactions: List[CapitalTransaction] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)
    valuations: List[Valuation] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.transactions or self.properties)

    def property_by_id(self, property_id: Optional[str]) -> Optional[Property]:
        if not property_id:
            return None
        return next((p for p in self.properties if p.property_id == property_id), None)


def _supabase_fetcher() -> Fetcher:
    from supabase_client.config import get_supabase_client
    from supabase_client.helpers import fetch_table

    try:
        client = get_supabase_client()
    except Exception as e:
        logger.warning("[Snapshot] Supabase client unavailable: %s", e)
        client = None

    def fetch(table: str, order: Optional[str] = None, in_filter=None) -> List[Dict[str, Any]]:
        if client is None:
            return []
        return fetch_table(table, order=order, in_filter=in_filter, client=client)

    return fetch


def _sqlite_fetcher() -> Fetcher:
    from database.queries import fetch_rows

    return fetch_rows


def get_fetcher(source: str = DATA_SOURCE) -> Fetcher:
    """Row fetcher for the configured data source ("supabase" or "sqlite")."""
    if source == "sqlite":
        return _sqlite_fetcher()
    if source != "supabase":
        logger.warning("[Snapshot] Unknown DATA_SOURCE %r, using supabase", source)
    return _supabase_fetcher()


def fetch_raw(
    fetch: Fetcher,
    valuation_addresses: Sequence[str] = VALUATION_ADDRESSES,
) -> Dict[str, List[Dict[str, Any]]]:
    """Run every table query concurrently; failures become empty lists."""

    def run(name: str) -> List[Dict[str, Any]]:
        table, order, in_column = QUERIES[name]
        in_filter = (in_column, list(valuation_addresses)) if in_column else None
        try:
            return fetch(table, order=order, in_filter=in_filter) or []
        except Exception as e:
            logger.warning("[Snapshot] ⚠️ '%s' fetch failed: %s: %s", table, type(e).__name__, e)
            return []

    with ThreadPoolExecutor(max_workers=len(QUERIES)) as pool:
        futures = {name: pool.submit(run, name) for name in QUERIES}
        return {name: fut.result() for name, fut in futures.items()}


def build_snapshot(raw: Dict[str, List[Dict[str, Any]]]) -> PortfolioSnapshot:
    """Validate raw rows into typed records."""
    return PortfolioSnapshot(
        transactions=parse_rows(Transaction, raw.get("transactions")),
        properties=parse_rows(Property, raw.get("properties")),
        capital_transactions=parse_rows(CapitalTransaction, raw.get("capital_transactions")),
        scenarios=parse_rows(Scenario, raw.get("scenarios")),
        valuations=parse_rows(Valuation, raw.get("valuations")),
    )


def load_snapshot(
    fetch: Optional[Fetcher] = None,
    valuation_addresses: Sequence[str] = VALUATION_ADDRESSES,
) -> PortfolioSnapshot:
    """Fetch and validate all portfolio tables in one pass."""
    fetch = fetch or get_fetcher()
    snapshot = build_snapshot(fetch_raw(fetch, valuation_addresses))
    logger.info(
        "[Snapshot] Loaded %d transactions, %d properties, %d capital events, %d scenarios, %d valuations",
        len(snapshot.transactions),
        len(snapshot.properties),
        len(snapshot.capital_transactions),
        len(snapshot.scenarios),
        len(snapshot.valuations),
    )
    return snapshot

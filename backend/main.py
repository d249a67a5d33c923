"""
PropertyInsights Backend API
============================

FastAPI service exposing the portfolio P&L, ledger and property analytics
as read-only JSON, plus health endpoints.

Design Intent
-------------
• Same pure functions as the dashboard (`analytics.*`); nothing is
  recomputed differently for the API.
• One cached `PortfolioSnapshot` per SNAPSHOT_TTL (`backend.dependencies`).
• Typed response models, stable JSON schemas.
• 404 for unknown property ids; FastAPI returns 422 for malformed
  query parameters (dates, sort column, direction).
"""

from __future__ import annotations

import logging
import os
import sys
import datetime as dt
from typing import Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, Query
from pydantic import BaseModel

# --------------------------------------------------------------------------- #
# Path setup: ensure project root on sys.path
# --------------------------------------------------------------------------- #

# Allows imports like `core.*`, `analytics.*` when running via uvicorn
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from analytics.aggregation import (
    LEDGER_COLUMNS,
    LedgerFilters,
    SortConfig,
    breakdown_by_type,
    filter_transactions,
    filtered_total,
    sort_transactions,
    summarize,
)
from analytics.snapshot import PortfolioSnapshot
from backend.dependencies import get_snapshot, require_property
from backend.routes.properties import router as properties_router
from core.health import system_health
from core.logging_setup import configure_logging
from core.metadata import __project__, __version__
from core.ui_config import DATA_SOURCE

configure_logging()
logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# FastAPI App
# --------------------------------------------------------------------------- #

app = FastAPI(
    title=f"{__project__} Backend API",
    version=__version__,
    description=(
        "Read-only portfolio analytics.\n"
        "- P&L summary and breakdown by type.\n"
        "- Filterable, sortable transaction ledger.\n"
        "- Per-property metrics, scenarios and capital-recovery estimate."
    ),
)

app.include_router(properties_router, prefix="/properties")
logger.info("[Backend] ✅ Registered /properties router.")

SortColumn = Literal["date", "property_address", "description", "item_type", "amount"]

# --------------------------------------------------------------------------- #
# Pydantic Models (UI & Agent friendly)
# --------------------------------------------------------------------------- #

class BreakdownItem(BaseModel):
    item_type: str
    total: float
    is_income: bool


class SummaryResponse(BaseModel):
    """
    Response schema for /portfolio/summary (stable contract).
    """
    property_id: Optional[str] = None
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None
    income: float
    expenses: float
    net: float
    net_margin_pct: float
    count: int
    breakdown: List[BreakdownItem]


class LedgerRow(BaseModel):
    id: Optional[str] = None
    date: Optional[dt.date] = None
    property_address: str
    description: str
    item_type: str
    amount: float


class LedgerResponse(BaseModel):
    """
    Response schema for /ledger (stable contract).
    """
    count: int
    total: float
    sort: Optional[str] = None
    direction: str
    results: List[LedgerRow]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #

def _filters(
    snapshot: PortfolioSnapshot,
    property_id: Optional[str],
    start: Optional[dt.date],
    end: Optional[dt.date],
    columns: Optional[Dict[str, Optional[List[str]]]] = None,
) -> LedgerFilters:
    prop = require_property(snapshot, property_id)
    return LedgerFilters(
        property_key=prop.address_key if prop else None,
        start=start,
        end=end,
        columns={k: frozenset(v) for k, v in (columns or {}).items() if v},
    )


# --------------------------------------------------------------------------- #
# Core Routes
# --------------------------------------------------------------------------- #

@app.get("/")
async def root():
    """
    Basic liveness probe.
    """
    return {
        "status": "ok",
        "message": f"{__project__} Backend is live.",
        "version": app.version,
        "data_source": DATA_SOURCE,
    }


@app.get("/health")
def health():
    """
    System health endpoint.

    Delegates to core.health.system_health (runtime info, data-source
    probe, CPU/memory).
    """
    return system_health()


@app.get("/portfolio/summary", response_model=SummaryResponse)
def portfolio_summary(
    property_id: Optional[str] = Query(None, description="Restrict to one property"),
    start: Optional[dt.date] = Query(None, description="Include items dated on/after (YYYY-MM-DD)"),
    end: Optional[dt.date] = Query(None, description="Include items dated on/before (YYYY-MM-DD)"),
    snapshot: PortfolioSnapshot = Depends(get_snapshot),
):
    """
    Rental income, expenses, net, net margin and breakdown by type for the
    filtered transactions.
    """
    rows = filter_transactions(snapshot.transactions, _filters(snapshot, property_id, start, end))
    pnl = summarize(rows)
    return SummaryResponse(
        property_id=property_id or None,
        start=start,
        end=end,
        income=pnl.income,
        expenses=pnl.expenses,
        net=pnl.net,
        net_margin_pct=pnl.net_margin_pct,
        count=pnl.count,
        breakdown=[
            BreakdownItem(item_type=r.item_type, total=r.total, is_income=r.is_income)
            for r in breakdown_by_type(rows)
        ],
    )


@app.get("/ledger", response_model=LedgerResponse)
def ledger(
    property_id: Optional[str] = Query(None, description="Restrict to one property"),
    start: Optional[dt.date] = Query(None, description="Include items dated on/after (YYYY-MM-DD)"),
    end: Optional[dt.date] = Query(None, description="Include items dated on/before (YYYY-MM-DD)"),
    sort: Optional[SortColumn] = Query(None, description=f"One of {list(LEDGER_COLUMNS)}"),
    direction: Literal["asc", "desc"] = Query("asc"),
    property_address: Optional[List[str]] = Query(None, description="Keep these property values (repeatable)"),
    description: Optional[List[str]] = Query(None, description="Keep these descriptions (repeatable)"),
    item_type: Optional[List[str]] = Query(None, description="Keep these types (repeatable)"),
    amount: Optional[List[str]] = Query(None, description="Keep these amounts, e.g. 1200 or -350.5 (repeatable)"),
    snapshot: PortfolioSnapshot = Depends(get_snapshot),
):
    """
    Filtered, sorted transaction ledger and its filtered total.

    Column filters mirror the dashboard multi-selects: values within one
    column are OR-ed, columns are AND-ed with each other and with the
    property and date filters.
    """
    columns = {
        "property_address": property_address,
        "description": description,
        "item_type": item_type,
        "amount": amount,
    }
    rows = filter_transactions(snapshot.transactions, _filters(snapshot, property_id, start, end, columns))
    rows = sort_transactions(rows, SortConfig(sort, direction) if sort else None)
    return LedgerResponse(
        count=len(rows),
        total=filtered_total(rows),
        sort=sort,
        direction=direction,
        results=[LedgerRow(**t.model_dump()) for t in rows],
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=os.getenv("BACKEND_HOST", "127.0.0.1"),
        port=int(os.getenv("BACKEND_PORT", "8000")),
    )


# --------------------------------------------------------------------------- #
# End of File
# --------------------------------------------------------------------------- #

"""
core/ui_config.py
-----------------
Central configuration hub for the dashboard, the backend and the data layer.

- Reads Supabase credentials, backend URL and data source from environment variables.
- Provides global constants for the P&L and breakeven calculations.
"""

from __future__ import annotations

import os
from datetime import date
from typing import List

# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------

BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")

# ---------------------------------------------------------------------------
# Data source configuration
# ---------------------------------------------------------------------------

SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY: str | None = os.getenv("SUPABASE_ANON_KEY")

# "supabase" (hosted store) or "sqlite" (local SQLAlchemy mirror)
DATA_SOURCE: str = os.getenv("DATA_SOURCE", "supabase").strip().lower()
DB_URL: str | None = os.getenv("PROPERTYINSIGHTS_DB_URL")

# Seconds the Streamlit layer keeps the last-fetched snapshot
SNAPSHOT_TTL: int = int(os.getenv("SNAPSHOT_TTL", "300"))

# ---------------------------------------------------------------------------
# Portfolio constants
# ---------------------------------------------------------------------------

INCOME_CATEGORY: str = os.getenv("INCOME_CATEGORY", "Rent Paid")

DEFAULT_VALUATION_ADDRESSES: List[str] = [
    "70 Estcourt Avenue",
    "66 Headingley Mount",
    "38 St Michaels Road",
    "32 Mayville Terrace",
    "25 Christopher Road",
    "8 Talbot Mount",
    "6 Pennington Grove",
    "6 Branksome Terrace",
    "5 Norville Terrace",
]


def _split_csv(raw: str | None) -> List[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


# Addresses used to restrict the valuations query
VALUATION_ADDRESSES: List[str] = (
    _split_csv(os.getenv("VALUATION_ADDRESSES")) or DEFAULT_VALUATION_ADDRESSES
)

# Date stamped on the market value estimate in the appreciation timeline
PORTFOLIO_AS_OF: date = date.fromisoformat(os.getenv("PORTFOLIO_AS_OF", "2026-02-26"))

# Date printed in the dashboard header
REPORT_DATE: date = date.fromisoformat(os.getenv("REPORT_DATE", "2026-02-27"))

# Breakeven projection bounds
BREAKEVEN_MAX_YEARS: float = float(os.getenv("BREAKEVEN_MAX_YEARS", "25"))
BREAKEVEN_EXTENSION_YEARS: int = int(os.getenv("BREAKEVEN_EXTENSION_YEARS", "2"))


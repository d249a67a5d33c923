# supabase_client/helpers.py
"""
Read-only access layer for the portfolio tables in Supabase.

Features
--------
- Safe wrappers around ``table(...).select(...)`` queries.
- Graceful handling of transient errors: a failed query yields ``[]``.
- Optional ordering and ``in`` filtering, matching what the dashboard needs.
- Connectivity probe for the health report.

Nothing here ever writes to the store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from supabase_client.config import get_supabase_client

logger = logging.getLogger(__name__)


def fetch_table(
    table: str,
    columns: str = "*",
    order: Optional[str] = None,
    in_filter: Optional[tuple[str, Sequence[str]]] = None,
    client: Any = None,
) -> List[Dict[str, Any]]:
    """
    Fetch rows from a Supabase table.

    Parameters
    ----------
    table : str
        Table name.
    columns : str
        Column list for ``select`` (default ``*``).
    order : str, optional
        Column to order by (ascending).
    in_filter : (column, values), optional
        Restrict rows to ``column IN values``.
    client : supabase.Client, optional
        Reuse an existing client; one is created otherwise.

    Returns
    -------
    list[dict]
        Rows from Supabase, or [] on any failure.
    """
    try:
        sb = client or get_supabase_client()
        logger.debug("[Supabase] → Fetching '%s' (%s)", table, columns)

        query = sb.table(table).select(columns)
        if in_filter is not None:
            column, values = in_filter
            query = query.in_(column, list(values))
        if order:
            query = query.order(order)

        res = query.execute()
        records = res.data or []
        logger.info("[Supabase] ← Got %d records from '%s'", len(records), table)
        return records

    except Exception as e:
        logger.warning("[Supabase] ⚠️ Fetch from '%s' failed: %s: %s", table, type(e).__name__, e)
        return []


def test_connection(client: Any = None) -> Optional[str]:
    """
    Verify Supabase connectivity with a one-row read of ``properties_master``.

    Returns
    -------
    Optional[str]
        Supabase project URL if success, None if failure.
    """
    try:
        sb = client or get_supabase_client()
        sb.table("properties_master").select("property_id").limit(1).execute()
        logger.info("[Supabase] ✅ Connection OK → %s", sb.supabase_url)
        return sb.supabase_url
    except Exception as e:
        logger.warning("[Supabase] ❌ Connection failed: %s", e)
        return None

# database/queries.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from . import models  # noqa: F401  (registers the mirror tables)
from .db_setup import Base, get_engine, init_db

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Engine (lazy, so importing this module never touches the disk)
# ---------------------------------------------------------------------
_engine: Optional[Engine] = None


def _get_default_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = get_engine()
        init_db(_engine)
    return _engine


def _table(name: str):
    try:
        return Base.metadata.tables[name]
    except KeyError:
        raise ValueError(f"Unknown mirror table: {name!r}") from None


# ---------------------------------------------------------------------
# Read operations (mirror of the Supabase queries)
# ---------------------------------------------------------------------
def fetch_rows(
    table: str,
    order: Optional[str] = None,
    in_filter: Optional[tuple[str, Sequence[str]]] = None,
    engine: Optional[Engine] = None,
) -> List[Dict[str, Any]]:
    """
    Return all rows of a mirror table as plain dicts keyed by store column name.

    Args:
        table: Supabase table name (e.g. "properties_master")
        order: Optional column to order by (ascending)
        in_filter: Optional (column, values) restriction
        engine: Optional engine; the configured mirror is used otherwise

    Returns:
        List of row dicts, or [] if the query fails
    """
    t = _table(table)
    stmt = select(t)
    if in_filter is not None:
        column, values = in_filter
        stmt = stmt.where(t.c[column].in_(list(values)))
    if order:
        stmt = stmt.order_by(t.c[order])

    try:
        with (engine or _get_default_engine()).connect() as conn:
            rows = [dict(r._mapping) for r in conn.execute(stmt)]
        logger.info("[SQLite] ← Got %d records from '%s'", len(rows), table)
        return rows
    except Exception as e:
        logger.warning("[SQLite] ⚠️ Fetch from '%s' failed: %s: %s", table, type(e).__name__, e)
        return []


# ---------------------------------------------------------------------
# Mirror loading (used to seed the offline copy from store exports)
# ---------------------------------------------------------------------
def load_rows(
    table: str,
    rows: Iterable[Dict[str, Any]],
    engine: Optional[Engine] = None,
) -> int:
    """
    Insert exported store rows into a mirror table.

    Unknown keys are ignored. Returns the number of rows inserted.
    """
    t = _table(table)
    payload = [{k: v for k, v in row.items() if k in t.c} for row in rows]
    if not payload:
        return 0

    eng = engine or _get_default_engine()
    with eng.begin() as conn:
        conn.execute(insert(t), payload)
    logger.info("[SQLite] → Loaded %d rows into '%s'", len(payload), table)
    return len(payload)


def ping(engine: Optional[Engine] = None) -> bool:
    """True if the mirror database accepts a connection."""
    try:
        with (engine or _get_default_engine()).connect() as conn:
            conn.execute(select(1))
        return True
    except Exception as e:
        logger.warning("[SQLite] ❌ Connection failed: %s", e)
        return False

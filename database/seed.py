# database/seed.py
"""
Seed the local SQLite mirror from JSON exports of the store tables.

Each export is a JSON array of row objects named after its table
(``transactions.json``, ``properties_master.json``, ...).

Usage:
    python -m database.seed exports/
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Dict, Optional

from sqlalchemy.engine import Engine

from .db_setup import Base, DB_URL, get_engine, init_db
from .queries import load_rows

logger = logging.getLogger(__name__)


def seed_from_dir(export_dir: str, engine: Optional[Engine] = None) -> Dict[str, int]:
    """
    Load every ``<table>.json`` found in ``export_dir`` into the mirror.

    Returns the number of rows inserted per table.
    """
    engine = engine or get_engine()
    init_db(engine)

    loaded: Dict[str, int] = {}
    for table in Base.metadata.tables:
        path = os.path.join(export_dir, f"{table}.json")
        if not os.path.exists(path):
            logger.info("[SQLite] No export for '%s', skipping", table)
            continue
        with open(path, encoding="utf-8") as fh:
            rows = json.load(fh)
        loaded[table] = load_rows(table, rows, engine=engine)
    return loaded


def main(argv: Optional[list] = None) -> int:
    from core.logging_setup import configure_logging

    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("usage: python -m database.seed <export_dir>")
        return 2

    counts = seed_from_dir(args[0])
    print(f"✅ Seeded {DB_URL}: {counts}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
